"""Integration tests: load/save parameters documents on disk with relative path anchoring."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from decompconf import AddressRange, Parameters
from decompconf.config import CONFIG_FILENAME, load_document, load_parameters, save_parameters


def _write(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_resolves_relative_paths_against_document(tmp_path: Path) -> None:
    cfg = _write(
        tmp_path / "project" / CONFIG_FILENAME,
        {
            "keepAllFuncs": True,
            "staticSignPaths": ["sigs/x.pat", "/abs/y.pat"],
            "ordinalNumberDirectory": "support/ordinals",
            "entryPoint": "0x401000",
        },
    )
    params = load_parameters(cfg)
    project = (tmp_path / "project").absolute()
    assert params.keep_all_functions is True
    assert params.static_signature_paths == {str(project / "sigs" / "x.pat"), "/abs/y.pat"}
    assert params.ordinal_numbers_directory == str(project / "support" / "ordinals")
    assert params.entry_point == 0x401000


def test_load_without_fixing_paths(tmp_path: Path) -> None:
    cfg = _write(tmp_path / CONFIG_FILENAME, {"abiPaths": ["abi/x86.json"]})
    params = load_parameters(cfg, fix_paths=False)
    assert params.abi_paths == {"abi/x86.json"}


def test_load_missing_document_gives_defaults(tmp_path: Path, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="decompconf.config")
    params = load_parameters(tmp_path / "nope.json")
    assert params == Parameters()
    assert "No usable parameters document" in caplog.text


def test_load_malformed_document_gives_defaults(tmp_path: Path) -> None:
    cfg = tmp_path / CONFIG_FILENAME
    cfg.write_text("{ not json", encoding="utf-8")
    assert load_document(cfg) is None
    assert load_parameters(cfg) == Parameters()


def test_load_undecodable_document_gives_defaults(tmp_path: Path) -> None:
    """A file that is not valid UTF-8 is treated like a malformed document."""
    cfg = tmp_path / CONFIG_FILENAME
    cfg.write_bytes(b'{"keepAllFuncs": true, "outputFile": "\xff\xfe"}')
    assert load_document(cfg) is None
    assert load_parameters(cfg) == Parameters()


def test_load_non_object_document_gives_defaults(tmp_path: Path) -> None:
    cfg = _write(tmp_path / CONFIG_FILENAME, [1, 2, 3])
    assert load_parameters(cfg) == Parameters()


def test_save_then_load_round_trip(tmp_path: Path) -> None:
    params = Parameters(selected_decode_only=True, output_file="/out/prog.c", main_address=0)
    params.user_static_signature_paths.add("/sigs/user.yara")
    params.selected_functions.add("main")
    params.selected_ranges.append(AddressRange(0x1000, 0x2000))
    params.output_asm_file = "/out/prog.dsm"  # runtime-only, not persisted

    cfg = tmp_path / "nested" / "dir" / CONFIG_FILENAME
    save_parameters(cfg, params)
    assert cfg.is_file()

    loaded = load_parameters(cfg)
    params.output_asm_file = ""
    assert loaded == params


def test_saved_document_is_plain_json(tmp_path: Path) -> None:
    cfg = tmp_path / CONFIG_FILENAME
    save_parameters(cfg, Parameters(), pretty=False)
    data = json.loads(cfg.read_text(encoding="utf-8"))
    assert data["entryPoint"] is None
    assert data["selectedRanges"] == []
