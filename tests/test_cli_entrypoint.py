from __future__ import annotations

import runpy

import pytest

from cpl_check import cli


def test_module_entrypoint_calls_cli_main(monkeypatch):
    called = {"value": False}

    def fake_main():
        called["value"] = True

    monkeypatch.setattr(cli, "main", fake_main)

    with pytest.raises(SystemExit) as exc_info:
        runpy.run_module("cpl_check.__main__", run_name="__main__")

    assert called["value"]
    assert exc_info.value.code == 0


def test_package_exports_resolve_lazily():
    import cpl_check

    assert cpl_check.CompositionPlaylist.__name__ == "CompositionPlaylist"
    with pytest.raises(AttributeError):
        cpl_check.not_a_real_export
