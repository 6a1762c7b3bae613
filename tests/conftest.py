import sys
from dataclasses import replace

import pytest

from tinyfy.pipeline.families import CSS_FAMILY, JS_FAMILY
from tinyfy.pipeline.models import ToolFamily

# Fake minifiers run through the current interpreter. Argument templates are
# str.format()-ed, so these scripts must not contain braces.
STREAM_MINIFIER = (
    "import sys; data = sys.stdin.buffer.read(); "
    "sys.stdout.buffer.write(b''.join(data.split()))"
)
FILE_MINIFIER = (
    "import sys; a = sys.argv; src = a[a.index('--minify') + 1]; dst = a[a.index('-o') + 1]; "
    "data = open(src, 'rb').read(); open(dst, 'wb').write(b''.join(data.split()))"
)


@pytest.fixture()
def python_executable() -> str:
    return sys.executable


@pytest.fixture()
def stream_family() -> ToolFamily:
    """JS family whose tool is a whitespace-stripping Python script."""
    return replace(JS_FAMILY, arguments=("-c", STREAM_MINIFIER))


@pytest.fixture()
def file_family() -> ToolFamily:
    """CSS family whose tool writes the output file itself."""
    return replace(
        CSS_FAMILY,
        arguments=("-c", FILE_MINIFIER, "--minify", "{input}", "-o", "{output}"),
    )
