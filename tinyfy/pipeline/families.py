from dataclasses import replace

from tinyfy.config.settings import Settings
from tinyfy.diagnostics.extractor import PARSE_ERROR, STRUCTURED_LOCATION
from tinyfy.pipeline.models import InvocationMode, ToolFamily

RUNTIME = "runtime"
JS_MINIFIER = "jsMinifier"
CSS_MINIFIER = "cssMinifier"

JS_FAMILY = ToolFamily(
    name="js",
    label="JS",
    tool_name="Terser",
    dependency=JS_MINIFIER,
    config_prefix="terser",
    syntaxes=frozenset({"javascript"}),
    source_pattern=r"\.js$",
    default_suffix=".min.js",
    mode=InvocationMode.STREAM,
    arguments=("terser", "--compress", "--mangle"),
    grammar=PARSE_ERROR,
    parse_error_title="Error Parsing JavaScript",
    probe_arguments=("terser", "--version"),
    install_hint="Please install it with:\nnpm install terser -g",
    install_url="https://github.com/terser/terser?tab=readme-ov-file#install",
)

CSS_FAMILY = ToolFamily(
    name="css",
    label="CSS",
    tool_name="Lightning CSS",
    dependency=CSS_MINIFIER,
    config_prefix="lightningcss",
    syntaxes=frozenset({"css"}),
    source_pattern=r"\.(css|scss|less)$",
    default_suffix=".min.css",
    mode=InvocationMode.FILE_PATH,
    arguments=("lightningcss", "--minify", "{input}", "-o", "{output}"),
    grammar=STRUCTURED_LOCATION,
    parse_error_title="Error Parsing CSS: {kind}",
    probe_arguments=("lightningcss", "--version"),
    install_hint="Please install it with:\nnpm install lightningcss-cli -g",
    install_url="https://lightningcss.dev/docs.html#from-the-cli",
)

RUNTIME_PROBE_ARGUMENTS = ("npm", "--version")
RUNTIME_INSTALL_URL = "https://nodejs.org/en/download"


def build_families(settings: Settings) -> tuple[ToolFamily, ...]:
    """Return the tool families with CSS syntaxes taken from settings."""
    css_syntaxes = frozenset(s.strip().lower() for s in settings.css_syntaxes if s.strip())
    css_family = replace(CSS_FAMILY, syntaxes=css_syntaxes or CSS_FAMILY.syntaxes)
    return (JS_FAMILY, css_family)
