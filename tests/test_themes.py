import pytest

from cadence.bootstrap import initialize
from cadence.config import ConfigurationError, ThemeConfig
from cadence.engine import create_typography_engine
from cadence.themes import (
    RegisteredThemeProvider,
    ThemeRegistry,
    YamlThemeProvider,
    create_default_registry,
    load_theme,
    theme_provider,
)


def test_default_registry_lists_bundled_themes():
    registry = create_default_registry()
    assert registry.names() == ["de-young", "default"]
    assert "De-Young" in registry
    assert registry.get("De-Young").title == "De Young"


def test_unknown_theme_raises():
    with pytest.raises(ConfigurationError) as exc_info:
        create_default_registry().get("nope")
    assert exc_info.value.field == "theme"
    assert "de-young" in exc_info.value.message


def test_custom_registry():
    registry = ThemeRegistry()
    registry.register("Tiny", lambda: ThemeConfig(base_font_size=12, base_line_height=1.2))
    assert registry.names() == ["tiny"]
    assert load_theme("tiny", registry).base_font_size_px == 12


def test_default_theme_matches_stock_typography():
    theme = load_theme("default")
    assert theme.base_font_size_px == 16
    assert theme.base_line_height == 1.45
    assert theme.ratio == 2
    assert theme.body_font_family == ("georgia", "serif")


def test_de_young_styles():
    engine = create_typography_engine(load_theme("de-young"))
    assert engine.base_font_size_px == 18
    styles = engine.styles()
    assert styles["a"]["box-shadow"] == "0 1px 0 0 currentColor"
    assert styles["a:hover,a:active"] == {"box-shadow": "none"}
    assert styles["h1,h2,h3,h4,h5,h6"]["margin-top"] == engine.rhythm(2)
    assert styles["h1,h2,h3,h4,h5,h6"]["font-family"] == '"Alegreya Sans",sans-serif'
    assert engine.google_fonts_url() == (
        "https://fonts.googleapis.com/css?family=Alegreya:400,400i,700,700i|Alegreya+Sans:400"
    )


def test_de_young_with_responsive_image_patch():
    context = initialize(
        load_theme("de-young"),
        lambda: {"a.gatsby-resp-image-link": {"boxShadow": "none"}},
    )
    css = context.engine.to_css()
    assert "a.gatsby-resp-image-link{box-shadow:none;}" in css
    assert "a{color:#d65947;text-decoration:none;box-shadow:0 1px 0 0 currentColor;}" in css
    assert str(context.rhythm(0.25)) == "0.445rem"


def test_load_theme_from_yaml(tmp_path):
    theme_file = tmp_path / "mine.yml"
    theme_file.write_text(
        "title: Mine\nbaseFontSize: 17px\nbaseLineHeight: 1.6\nscaleRatio: golden\n",
        encoding="utf-8",
    )
    theme = load_theme("mine.yml", project_root=tmp_path)
    assert theme.title == "Mine"
    assert theme.base_font_size_px == 17
    assert load_theme(str(theme_file)).title == "Mine"


def test_yaml_theme_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        YamlThemeProvider(tmp_path / "missing.yaml").load()

    broken = tmp_path / "broken.yaml"
    broken.write_text("baseFontSize: [\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        YamlThemeProvider(broken).load()

    incomplete = tmp_path / "incomplete.yaml"
    incomplete.write_text("baseLineHeight: 1.5\n", encoding="utf-8")
    with pytest.raises(ConfigurationError) as exc_info:
        YamlThemeProvider(incomplete).load()
    assert exc_info.value.field == "base_font_size"


def test_theme_provider_picks_provider_by_name_or_path(tmp_path):
    from cadence.protocols import ThemeProvider

    yaml_provider = theme_provider("mine.yaml", project_root=tmp_path)
    assert isinstance(yaml_provider, YamlThemeProvider)
    assert isinstance(yaml_provider, ThemeProvider)
    assert yaml_provider.path == tmp_path / "mine.yaml"

    named = theme_provider("De-Young")
    assert isinstance(named, RegisteredThemeProvider)
    assert isinstance(named, ThemeProvider)
    assert named.load().title == "De Young"

    with pytest.raises(ConfigurationError):
        theme_provider("nope", ThemeRegistry()).load()
