"""Tests for the YAML language catalog."""

import pytest

from guided_installer.catalog import YamlLanguageCatalog


def test_packaged_catalog_has_default_language():
    languages = YamlLanguageCatalog().get_languages()
    assert "en_US" in languages
    assert languages["de_DE"]["native"] == "Deutsch"


def test_custom_catalog_with_shorthand(tmp_path):
    p = tmp_path / "languages.yaml"
    p.write_text("en_US:\n  name: English\nfr_FR: French\nxx_XX:\n", encoding="utf-8")

    languages = YamlLanguageCatalog(str(p)).get_languages()

    assert languages == {
        "en_US": {"name": "English"},
        "fr_FR": {"name": "French"},
        "xx_XX": {},
    }


def test_catalog_must_be_mapping(tmp_path):
    p = tmp_path / "languages.yaml"
    p.write_text("- en_US\n", encoding="utf-8")

    with pytest.raises(ValueError):
        YamlLanguageCatalog(str(p)).get_languages()


def test_catalog_drives_installer_language(tmp_path, software, storage, engine, bootloader, disk_preparer):
    from guided_installer import Installer

    p = tmp_path / "languages.yaml"
    p.write_text("en_US: English\ncs_CZ: Czech\n", encoding="utf-8")
    installer = Installer(
        catalog=YamlLanguageCatalog(str(p)),
        software=software,
        storage=storage,
        proposal_engine=engine,
        bootloader=bootloader,
        disk_preparer=disk_preparer,
    )

    assert installer.probe() is True
    installer.language = "cs_CZ"
    assert installer.language == "cs_CZ"
