"""Global style generation for Cadence.

Builds the selector table a typography engine renders to CSS: a normalize
reset, base html/body rules, block spacing on the vertical rhythm, heading
sizes on the modular scale, lists, tables and code.

Key functions:
- create_styles: Generate the base selector table for an engine.
- merge_style_tables: Property-level merge of selector tables.
- compile_styles: Render a selector table to minified CSS.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from .units import Length, format_number

if TYPE_CHECKING:
    from .engine import TypographyEngine

NORMALIZE_CSS = (
    "html{font-family:sans-serif;-ms-text-size-adjust:100%;-webkit-text-size-adjust:100%}"
    "body{margin:0}"
    "article,aside,details,figcaption,figure,footer,header,main,menu,nav,section,summary{display:block}"
    "audio,canvas,progress,video{display:inline-block}"
    "audio:not([controls]){display:none;height:0}"
    "progress{vertical-align:baseline}"
    "[hidden],template{display:none}"
    "a{background-color:transparent;-webkit-text-decoration-skip:objects}"
    "a:active,a:hover{outline-width:0}"
    "abbr[title]{border-bottom:none;text-decoration:underline;text-decoration:underline dotted}"
    "b,strong{font-weight:inherit;font-weight:bolder}"
    "dfn{font-style:italic}"
    "h1{font-size:2em;margin:.67em 0}"
    "mark{background-color:#ff0;color:#000}"
    "small{font-size:80%}"
    "sub,sup{font-size:75%;line-height:0;position:relative;vertical-align:baseline}"
    "sub{bottom:-.25em}"
    "sup{top:-.5em}"
    "img{border-style:none}"
    "svg:not(:root){overflow:hidden}"
    "code,kbd,pre,samp{font-family:monospace,monospace;font-size:1em}"
    "figure{margin:1em 40px}"
    "hr{box-sizing:content-box;height:0;overflow:visible}"
    "button,input,optgroup,select,textarea{font:inherit;margin:0}"
    "optgroup{font-weight:700}"
    "button,input{overflow:visible}"
    "button,select{text-transform:none}"
    "[type=reset],[type=submit],button,html [type=button]{-webkit-appearance:button}"
    "fieldset{border:1px solid silver;margin:0 2px;padding:.35em .625em .75em}"
    "legend{box-sizing:border-box;color:inherit;display:table;max-width:100%;padding:0;white-space:normal}"
    "textarea{overflow:auto}"
    "[type=checkbox],[type=radio]{box-sizing:border-box;padding:0}"
    "[type=search]{-webkit-appearance:textfield;outline-offset:-2px}"
    "::-webkit-file-upload-button{-webkit-appearance:button;font:inherit}"
)

BLOCK_ELEMENTS = (
    "h1,h2,h3,h4,h5,h6,hgroup,ul,ol,dl,dd,p,figure,pre,table,fieldset,"
    "blockquote,form,noscript,iframe,img,hr,address"
)

# Modular scale steps for h1..h6.
HEADING_STEPS = {"h1": 1, "h2": 3 / 5, "h3": 2 / 5, "h4": 0, "h5": -1 / 5, "h6": -1.5 / 5}

_FONT_FEATURES = '"kern", "liga", "clig", "calt"'
_UPPER_RE = re.compile(r"([A-Z])")


def gray(lightness: float) -> str:
    """Return a neutral gray at the given lightness percentage."""
    return f"hsl(0,0%,{format_number(lightness)}%)"


def font_stack(families: Iterable[str]) -> str:
    """Join font names into a CSS font-family value, quoting multi-word names."""
    names = []
    for name in families:
        if " " in name and not name.startswith(("'", '"')):
            name = f'"{name}"'
        names.append(name)
    return ",".join(names)


def to_kebab(prop: str) -> str:
    """Convert a camelCase property name to its CSS spelling.

    Examples:
        >>> to_kebab("boxShadow")
        'box-shadow'

        >>> to_kebab("MozFontFeatureSettings")
        '-moz-font-feature-settings'
    """
    if "-" in prop or prop.islower():
        return prop
    if prop.startswith("ms") and len(prop) > 2 and prop[2].isupper():
        prop = "Ms" + prop[2:]
    kebab = _UPPER_RE.sub(r"-\1", prop).lower()
    return kebab


def css_value(value: Any) -> str:
    if isinstance(value, Length):
        return str(value)
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def merge_style_tables(*tables: Mapping[str, Mapping[str, Any]]) -> dict[str, dict[str, Any]]:
    """Merge selector tables in order, later tables winning per property.

    Property names are normalised to their CSS spelling so ``boxShadow`` and
    ``box-shadow`` refer to the same declaration.
    """
    merged: dict[str, dict[str, Any]] = {}
    for table in tables:
        for selector, declarations in table.items():
            target = merged.setdefault(selector, {})
            for prop, value in declarations.items():
                target[to_kebab(prop)] = value
    return merged


def compile_styles(table: Mapping[str, Mapping[str, Any]], normalize: bool = False) -> str:
    """Render a selector table to minified CSS.

    Selectors with no declarations are skipped.

    Args:
        table: Selector to declarations mapping.
        normalize: Prefix the output with the normalize reset.

    Returns:
        CSS text.
    """
    rules = []
    for selector, declarations in table.items():
        if not declarations:
            continue
        body = "".join(
            f"{to_kebab(prop)}:{css_value(value)};" for prop, value in declarations.items()
        )
        rules.append(f"{selector}{{{body}}}")
    css = "".join(rules)
    return NORMALIZE_CSS + css if normalize else css


def create_styles(engine: TypographyEngine) -> dict[str, dict[str, Any]]:
    """Generate the base selector table for an engine.

    Args:
        engine: Typography engine supplying rhythm and scale.

    Returns:
        Selector to declarations mapping, in output order.
    """
    config = engine.config
    rhythm = engine.rhythm
    block_margin = rhythm(config.block_margin_bottom)
    body_fonts = font_stack(config.body_font_family)
    line_height_ratio = engine.base_line_height_px / engine.base_font_size_px

    styles: dict[str, dict[str, Any]] = {
        "html": {
            "font": (
                f"{format_number(engine.base_font_size_px / 16 * 100)}%/"
                f"{format_number(line_height_ratio)} {body_fonts}"
            ),
            "box-sizing": "border-box",
            "overflow-y": "scroll",
        },
        "*,*:before,*:after": {"box-sizing": "inherit"},
        "body": {
            "color": config.body_color,
            "font-family": body_fonts,
            "font-weight": config.body_weight,
            "word-wrap": "break-word",
            "font-kerning": "normal",
            "-moz-font-feature-settings": _FONT_FEATURES,
            "-ms-font-feature-settings": _FONT_FEATURES,
            "-webkit-font-feature-settings": _FONT_FEATURES,
            "font-feature-settings": _FONT_FEATURES,
        },
        "img": {"max-width": "100%"},
        BLOCK_ELEMENTS: {
            "margin-left": 0,
            "margin-right": 0,
            "margin-top": 0,
            "padding-bottom": 0,
            "padding-left": 0,
            "padding-right": 0,
            "padding-top": 0,
            "margin-bottom": block_margin,
        },
        "blockquote": {
            "margin-right": rhythm(1),
            "margin-bottom": block_margin,
            "margin-left": rhythm(1),
        },
        "b,strong,dt,th": {"font-weight": config.bold_weight},
        "hr": {
            "background": gray(80),
            "border": "none",
            "height": "1px",
            "margin-bottom": f"calc({block_margin} - 1px)",
        },
        "ol,ul": {
            "list-style-position": "outside",
            "list-style-image": "none",
            "margin-left": rhythm(1),
        },
        "li": {"margin-bottom": f"calc({block_margin} / 2)"},
        "ol li,ul li": {"padding-left": 0},
        "li > ol,li > ul": {
            "margin-left": rhythm(1),
            "margin-bottom": f"calc({block_margin} / 2)",
            "margin-top": f"calc({block_margin} / 2)",
        },
        "blockquote *:last-child,li *:last-child,p *:last-child": {"margin-bottom": 0},
        "li > p": {"margin-bottom": f"calc({block_margin} / 2)"},
        "code,kbd,pre,samp": engine.adjust_font_size_to("85%").as_css(),
        "abbr,acronym": {"border-bottom": f"1px dotted {gray(50)}", "cursor": "help"},
        "abbr[title]": {
            "border-bottom": f"1px dotted {gray(50)}",
            "cursor": "help",
            "text-decoration": "none",
        },
        "table": {
            **engine.scale(-1 / 5).as_css(),
            "border-collapse": "collapse",
            "width": "100%",
        },
        "thead": {"text-align": "left"},
        "td,th": {
            "text-align": "left",
            "border-bottom": f"1px solid {gray(88)}",
            "font-feature-settings": '"tnum"',
            "-moz-font-feature-settings": '"tnum"',
            "-ms-font-feature-settings": '"tnum"',
            "-webkit-font-feature-settings": '"tnum"',
            "padding-left": rhythm(2 / 3),
            "padding-right": rhythm(2 / 3),
            "padding-top": rhythm(1 / 2),
            "padding-bottom": f"calc({rhythm(1 / 2)} - 1px)",
        },
        "th:first-child,td:first-child": {"padding-left": 0},
        "th:last-child,td:last-child": {"padding-right": 0},
        "h1,h2,h3,h4,h5,h6": {
            "color": config.header_color,
            "font-family": font_stack(config.header_font_family),
            "font-weight": config.header_weight,
            "text-rendering": "optimizeLegibility",
        },
    }
    for tag, step in HEADING_STEPS.items():
        styles[tag] = {
            **engine.scale(step).as_css(),
            "line-height": config.header_line_height,
        }
    return styles
