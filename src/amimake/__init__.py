"""
amimake - Convert between Amiga makefile dialects.

This package provides tools for:
- Detecting whether a build file is GNU Make, SAS/C, DICE or Lattice (detect)
- Parsing any of the four dialects into a dialect-neutral model (parse)
- Translating compiler options and recipe commands (mapping)
- Rendering the model as any of the four dialects (render)
- Running a whole conversion, from the command line or from code (convert)
"""

from amimake.model import (
    Dialect,
    Variable,
    Command,
    Rule,
    BuildModel,
    DEFAULT_TARGETS,
    DEFAULT_FILENAMES,
    default_target,
    display_name,
    parse_dialect_name,
    summarize,
)

from amimake.errors import (
    ConversionError,
    SourceUnreadableError,
    DestinationExistsError,
    DestinationUnwritableError,
    UnknownDialectError,
    DetectionError,
    MakefileNotFoundError,
    AmbiguousMakefileError,
)

from amimake.source import (
    read_lines,
    write_bytes,
    destination_available,
)

from amimake.detect import (
    detect_lines,
    find_makefile,
)

from amimake.parse import (
    ParseLimits,
    Diagnostic,
    get_parser,
    parse_lines,
)

from amimake.mapping import (
    map_option,
    map_flags,
    map_compiler,
    map_command,
)

from amimake.render import (
    get_renderer,
    render_text,
)

from amimake.convert import (
    ConversionResult,
    resolve_target,
    main,
)

__version__ = "0.1.0"
