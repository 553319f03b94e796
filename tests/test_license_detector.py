import io
import zipfile

import pytest

from adapters.license_detector import FileLicenseDetector, classify_license, is_license_file
from tests.helpers import make_zip

APACHE = "Apache License\nVersion 2.0, January 2004\nhttp://www.apache.org/licenses/\n"
BSD3 = (
    "Redistribution and use in source and binary forms, with or without modification, "
    "are permitted provided that...\n* Neither the name of the copyright holder..."
)
MIT = "Permission is hereby granted, free of charge, to any person obtaining a copy"


@pytest.mark.parametrize(
    "text, expected",
    [
        (APACHE, ["Apache-2.0"]),
        (BSD3, ["BSD-3-Clause"]),
        (MIT, ["MIT"]),
        ("All rights reserved. Do not copy.", []),
    ],
)
def test_classify_license(text, expected):
    assert classify_license(text) == expected


def test_is_license_file():
    assert is_license_file("LICENSE")
    assert is_license_file("LICENSE.md")
    assert is_license_file("licence.txt")
    assert is_license_file("COPYING")
    assert is_license_file("UNLICENSE")
    assert not is_license_file("license_check.go")
    assert not is_license_file("README.md")


def _reader(files):
    return zipfile.ZipFile(io.BytesIO(make_zip("example.com/m", "v1.0.0", files)))


def test_detects_root_license_files_only():
    reader = _reader(
        {
            "LICENSE": MIT,
            "COPYING.txt": APACHE,
            "vendor/x/LICENSE": BSD3,
            "m.go": "package m",
        }
    )

    licenses = FileLicenseDetector("example.com/m", "v1.0.0", reader).module_licenses()

    assert [(lic.file_path, lic.types) for lic in licenses] == [
        ("COPYING.txt", ["Apache-2.0"]),
        ("LICENSE", ["MIT"]),
    ]
    assert licenses[1].contents == MIT


def test_overrides_replace_classification():
    reader = _reader({"LICENSE": "custom terms"})

    licenses = FileLicenseDetector(
        "example.com/m", "v1.0.0", reader, {"example.com/m": ["BSD-2-Clause"]}
    ).module_licenses()

    assert licenses[0].types == ["BSD-2-Clause"]


def test_module_without_license_files():
    reader = _reader({"m.go": "package m"})

    assert FileLicenseDetector("example.com/m", "v1.0.0", reader).module_licenses() == []


def test_upper_case_module_licenses_are_found():
    reader = zipfile.ZipFile(io.BytesIO(make_zip("github.com/!burnt!sushi/toml", "v1.3.2", {"COPYING": MIT})))

    licenses = FileLicenseDetector("github.com/!burnt!sushi/toml", "v1.3.2", reader).module_licenses()

    assert [(lic.file_path, lic.types) for lic in licenses] == [("COPYING", ["MIT"])]


def test_overrides_accept_decoded_module_path():
    reader = zipfile.ZipFile(io.BytesIO(make_zip("github.com/!burnt!sushi/toml", "v1.3.2", {"LICENSE": "terms"})))

    licenses = FileLicenseDetector(
        "github.com/!burnt!sushi/toml", "v1.3.2", reader, {"github.com/BurntSushi/toml": ["MIT"]}
    ).module_licenses()

    assert licenses[0].types == ["MIT"]
