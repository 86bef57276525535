#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Check that every translation file of a language has all keys of its
reference-language counterpart.
Usage: python3 validate_translations.py <language1> [language2] ...

Example:
python3 validate_translations.py fr
python3 validate_translations.py fr de

Layout:
<root>/english/Game_en.json      reference files
<root>/fr/Game_fr.json           one directory per language

Output:
- A success line per fully translated language (stdout)
- Warnings, errors and missing keys per file (stderr)

Exit status is 0 only if every requested language has all keys.
"""

import os
import re
import sys
from typing import Dict, List, NamedTuple, Optional, Set

import yaml

from i18n_keys import DocumentError, load_keys

root_dir = os.environ.get(
    "TRANSLATIONS_ROOT", os.path.join(os.path.dirname(os.path.abspath(__file__)), "..")
)
config_file = "translations.yml"

DEFAULT_REFERENCE_DIR = "english"
DEFAULT_REFERENCE_CODE = "en"

LANG_CODE_PATTERN = re.compile(r"_([a-z]{2,3})\.json$", re.IGNORECASE)


class LanguageReport(NamedTuple):
    valid: bool
    # target filename -> keys of the reference file absent from it
    missing: Dict[str, Set[str]]
    # target filenames that could not be parsed
    errors: List[str]


def error(message: str):
    print(message, file=sys.stderr)


def load_config(root: str) -> Dict:
    """
    Read <root>/translations.yml if present and fill in defaults.

    Args:
        root (str): Translations root directory

    Returns:
        dict with "reference_dir", "reference_code" and "languages"
        (directory name -> explicit language code)
    """
    path = os.path.join(root, config_file)
    data = {}
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                # Use safe_load to prevent arbitrary code execution
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            error(f"Error: YAML parsing failed in {path} - {e}")
            sys.exit(1)

        # Handle empty files
        if data is None:
            data = {}
        if not isinstance(data, dict):
            error(f"Error: {path} must contain a mapping")
            sys.exit(1)

    reference = data.get("reference") or {}
    languages = data.get("languages") or {}
    if not isinstance(reference, dict) or not isinstance(languages, dict):
        error(f"Error: 'reference' and 'languages' in {path} must be mappings")
        sys.exit(1)

    # YAML 1.1 reads unquoted no/yes/null/numbers as non-strings
    values = [
        reference.get("dir", DEFAULT_REFERENCE_DIR),
        reference.get("code", DEFAULT_REFERENCE_CODE),
    ]
    for item in [*languages.keys(), *languages.values(), *values]:
        if not isinstance(item, str) or not item:
            error(f"Error: {item!r} in {path} is not a string, quote it")
            sys.exit(1)

    return {
        "reference_dir": values[0],
        "reference_code": values[1],
        "languages": dict(languages),
    }


def load_reference_keys(reference_dir: str, reference_code: str) -> Dict[str, Set[str]]:
    """Load the key set of every reference file, keyed by filename.

    Any problem here is fatal: nothing can be validated against a broken
    reference.
    """
    if not os.path.isdir(reference_dir):
        error(f"Error: Reference directory not found: {reference_dir}")
        sys.exit(1)

    suffix = f"_{reference_code}.json"
    files = sorted(f for f in os.listdir(reference_dir) if f.endswith(suffix))

    reference_keys = {}
    for file in files:
        file_path = os.path.join(reference_dir, file)
        try:
            reference_keys[file] = load_keys(file_path)
        except DocumentError as e:
            error(f"Error reading {file_path}: {e}")
            sys.exit(1)
    return reference_keys


def extract_language_code(lang_dir: str) -> Optional[str]:
    """
    Infer the language code from the file names in a language directory,
    e.g. "Game_fr.json" -> "fr".

    All files must agree on the code. Returns None when the directory is
    missing, has no matching files, or mixes several codes.
    """
    if not os.path.isdir(lang_dir):
        return None

    files = sorted(f for f in os.listdir(lang_dir) if f.endswith(".json"))
    codes = set()
    for file in files:
        match = LANG_CODE_PATTERN.search(file)
        if match:
            codes.add(match.group(1))

    if len(codes) > 1:
        error(
            f"Error: Files in {lang_dir} use several language codes: "
            f"{', '.join(sorted(codes))}"
        )
        return None
    return codes.pop() if codes else None


def target_filename(filename: str, reference_code: str, lang_code: str) -> str:
    """Game_en.json -> Game_fr.json"""
    suffix = f"_{reference_code}.json"
    if filename.endswith(suffix):
        filename = filename[: -len(suffix)]
    return f"{filename}_{lang_code}.json"


def check_language(
    lang_dir: str,
    lang_name: str,
    reference_keys: Dict[str, Set[str]],
    lang_code: str,
    reference_code: str = DEFAULT_REFERENCE_CODE,
) -> LanguageReport:
    valid = True
    missing_keys = {}
    errors = []

    for filename, expected_keys in sorted(reference_keys.items()):
        lang_filename = target_filename(filename, reference_code, lang_code)
        file_path = os.path.join(lang_dir, lang_filename)

        actual_keys = set()
        if os.path.exists(file_path):
            try:
                actual_keys = load_keys(file_path)
            except DocumentError as e:
                error(f"Error reading {file_path}: {e}")
                errors.append(lang_filename)
                valid = False
                continue
        else:
            error(f"Warning: {lang_filename} does not exist in {lang_name} folder")

        missing = expected_keys - actual_keys
        if missing:
            missing_keys[lang_filename] = missing
            valid = False

    return LanguageReport(valid, missing_keys, errors)


def print_report(lang_name: str, report: LanguageReport):
    if report.valid:
        print(f"✓ {lang_name}: All translation keys are present")
        return

    error(f"✗ {lang_name}: Missing translation keys:")
    for filename, missing in report.missing.items():
        error(f"  {filename}:")
        for key in sorted(missing):
            error(f"    - {key}")
    for filename in report.errors:
        error(f"  {filename}: could not be parsed")


def validate_language(
    lang_dir: str,
    lang_name: str,
    reference_keys: Dict[str, Set[str]],
    lang_code: Optional[str] = None,
    reference_code: str = DEFAULT_REFERENCE_CODE,
) -> bool:
    """
    Validate a language folder against the reference keys and print the result.

    Args:
        lang_dir (str): Path to the language directory
        lang_name (str): Name of the language, for display
        reference_keys (dict): Reference filename -> set of keys
        lang_code (str): Explicit language code; inferred from the files if None
        reference_code (str): Code used in the reference file names

    Returns:
        bool: True if all keys are present
    """
    if lang_code is None:
        lang_code = extract_language_code(lang_dir)
    if not lang_code:
        error(f"Error: Could not determine language code for {lang_name}")
        return False

    report = check_language(lang_dir, lang_name, reference_keys, lang_code, reference_code)
    print_report(lang_name, report)
    return report.valid


def main(argv: Optional[List[str]] = None, root: Optional[str] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if root is None:
        root = root_dir

    if not argv:
        prog = os.path.basename(sys.argv[0]) or "validate_translations.py"
        error(f"Usage: {prog} <language1> [language2] ...")
        error(f"Example: {prog} fr")
        return 1

    config = load_config(root)
    reference_name = config["reference_dir"]
    reference_code = config["reference_code"]

    reference_keys = load_reference_keys(
        os.path.join(root, reference_name), reference_code
    )
    if not reference_keys:
        error(f"Error: No {reference_name} translation files found")
        return 1

    print(f"Found {len(reference_keys)} {reference_name} translation file(s)")

    all_valid = True
    for lang in argv:
        lang_dir = os.path.join(root, lang)

        if not os.path.isdir(lang_dir):
            error(f"Error: Language directory not found: {lang_dir}")
            all_valid = False
            continue

        is_valid = validate_language(
            lang_dir,
            lang,
            reference_keys,
            config["languages"].get(lang),
            reference_code,
        )
        all_valid = all_valid and is_valid

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
