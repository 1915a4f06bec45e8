import logging

import pytest

from cadence import bootstrap
from cadence.bootstrap import AppContext, initialize, initialize_project
from cadence.config import ConfigurationError, ThemeConfig
from cadence.injection import HtmlDocumentTarget, InjectionError, MemoryTarget

SCENARIO = {"base_font_size": 16, "base_line_height": 1.45, "scale_ratio": 1.25}
PATCH = {"a.gatsby-resp-image-link": {"boxShadow": "none"}}


class FailingTarget:
    def __init__(self):
        self.calls = 0

    def inject(self, css):
        self.calls += 1
        raise InjectionError("document", "no <head> element")


def test_initialize_builds_context():
    context = initialize(SCENARIO, PATCH)
    assert isinstance(context, AppContext)
    assert context.config.overrides["a.gatsby-resp-image-link"] == {"boxShadow": "none"}
    assert context.rhythm(1) == context.engine.rhythm(1)
    assert context.scale(2) == context.engine.scale(2)
    assert context.engine.config is context.config
    assert not context.injected


def test_initialize_accepts_theme_config_and_callable_patch():
    theme = ThemeConfig.from_mapping(SCENARIO)
    context = initialize(theme, lambda: PATCH)
    assert dict(context.config.overrides) == PATCH
    assert theme.overrides == {}


def test_production_does_not_inject():
    target = MemoryTarget()
    initialize(SCENARIO, PATCH, inject_styles=False, target=target)
    assert target.injections == 0
    assert target.css is None


def test_development_injects_once_per_call():
    target = MemoryTarget()
    context = initialize(SCENARIO, PATCH, inject_styles=True, target=target)
    assert context.injected
    assert target.injections == 1
    assert "a.gatsby-resp-image-link{box-shadow:none;}" in target.css

    initialize(SCENARIO, PATCH, inject_styles=True, target=target)
    assert target.injections == 2


def test_repeated_initialize_gives_identical_values():
    first = initialize(SCENARIO, PATCH)
    second = initialize(SCENARIO, PATCH)
    for lines in (0, 0.25, 1, 3):
        assert first.rhythm(lines) == second.rhythm(lines)
    for step in (-1, 0, 1, 2):
        assert first.scale(step) == second.scale(step)


def test_missing_base_value_fails_before_engine_is_built(monkeypatch):
    built = []
    monkeypatch.setattr(
        bootstrap, "create_typography_engine", lambda config: built.append(config)
    )
    with pytest.raises(ConfigurationError) as exc_info:
        initialize({"base_line_height": 1.45, "scale_ratio": 1.25}, PATCH)
    assert exc_info.value.field == "base_font_size"
    assert built == []


def test_malformed_patch_fails(monkeypatch):
    built = []
    monkeypatch.setattr(
        bootstrap, "create_typography_engine", lambda config: built.append(config)
    )
    with pytest.raises(ConfigurationError):
        initialize(SCENARIO, {"a": "none"})
    with pytest.raises(ConfigurationError):
        initialize(42)
    assert built == []


def test_injection_failure_is_logged_not_raised(caplog):
    target = FailingTarget()
    with caplog.at_level(logging.WARNING, logger="cadence.injection"):
        context = initialize(SCENARIO, inject_styles=True, target=target)
    assert target.calls == 1
    assert not context.injected
    assert "Style injection" in caplog.text
    assert str(context.rhythm(1)) == "1.45rem"


def test_undecodable_document_is_logged_not_raised(tmp_path, caplog):
    page = tmp_path / "index.html"
    page.write_bytes(b"<html><head>\xff\xfe</head></html>")
    with caplog.at_level(logging.WARNING, logger="cadence.injection"):
        context = initialize(SCENARIO, inject_styles=True, target=HtmlDocumentTarget(page))
    assert not context.injected
    assert "not valid UTF-8" in caplog.text
    assert str(context.rhythm(1)) == "1.45rem"


def test_missing_target_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="cadence.injection"):
        context = initialize(SCENARIO, inject_styles=True)
    assert not context.injected
    assert "No style target" in caplog.text


def _write_project(root, text):
    (root / "cadence.yaml").write_text(text, encoding="utf-8")
    (root / "index.html").write_text(
        "<html><head><title>x</title></head><body></body></html>", encoding="utf-8"
    )


def test_initialize_project_development_injects_into_configured_target(tmp_path):
    _write_project(
        tmp_path,
        "theme: de-young\n"
        "target: index.html\n"
        "overrides:\n"
        "  a.gatsby-resp-image-link:\n"
        "    boxShadow: none\n",
    )
    context = initialize_project(tmp_path, environ={})
    assert context.injected
    assert context.config.title == "De Young"
    html = (tmp_path / "index.html").read_text(encoding="utf-8")
    assert '<head><style id="typography">' in html
    assert "a.gatsby-resp-image-link{box-shadow:none;}" in html


def test_initialize_project_production_skips_injection(tmp_path):
    _write_project(tmp_path, "theme: de-young\ntarget: index.html\n")
    context = initialize_project(tmp_path, environ={"CADENCE_ENV": "production"})
    assert not context.injected
    assert "typography" not in (tmp_path / "index.html").read_text(encoding="utf-8")


def test_initialize_project_applies_options_and_theme_files(tmp_path):
    (tmp_path / "theme.yaml").write_text(
        "baseFontSize: 16px\nbaseLineHeight: 1.45\nscaleRatio: 1.25\n", encoding="utf-8"
    )
    (tmp_path / "cadence.yaml").write_text(
        "theme: theme.yaml\noptions:\n  base_font_size: 20px\n", encoding="utf-8"
    )
    target = MemoryTarget()
    context = initialize_project(tmp_path, environ={}, target=target)
    assert context.engine.base_font_size_px == 20
    assert target.injections == 1


def test_initialize_project_rejects_bad_options(tmp_path):
    (tmp_path / "cadence.yaml").write_text("options: [1, 2]\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        initialize_project(tmp_path, environ={})
