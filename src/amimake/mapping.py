"""
Translates compiler options and recipe commands between dialects.

Every option belongs to a canonical class (optimization, debug level,
include directory, ...). Each class has one representative token per
dialect; translating a token means finding its class in the source
dialect and emitting the target dialect's token for that class. The
expanded lookup table is keyed by (class, source, target) so that the
few direction-specific exceptions can be overridden one entry at a time.

Mapping is best-effort: tokens that are not recognised are returned
unchanged, and no attempt is made to prove semantic equivalence.
"""

from amimake.model import Dialect

KNOWN_DIALECTS = (Dialect.GNU_MAKE, Dialect.SAS_C, Dialect.DICE, Dialect.LATTICE)

GNU = Dialect.GNU_MAKE
SAS = Dialect.SAS_C
DICE = Dialect.DICE
LATTICE = Dialect.LATTICE

# Canonical option class -> representative token per dialect.
# An empty token means the dialect has no equivalent and the option is dropped.
# Order matters where a dialect reuses a token: the first class claims it.
OPTION_TOKENS: dict[str, dict[Dialect, str]] = {
    "optimize": {SAS: "OPTIMIZE", GNU: "-O2", DICE: "-O", LATTICE: "-O"},
    "debug": {SAS: "DEBUG=L", GNU: "-g", DICE: "-d1", LATTICE: "-d2"},
    "debug_full": {SAS: "DEBUG=FF", GNU: "-g", DICE: "-s", LATTICE: "-g"},
    "near_data": {SAS: "DATA=NEAR", GNU: "-m68000", DICE: "-ms", LATTICE: "-ms"},
    "no_warnings": {SAS: "IGN=A", GNU: "-w", DICE: "", LATTICE: "-w"},
    "compile_only": {SAS: "OBJNAME", GNU: "-c", DICE: "-c", LATTICE: "-c"},
    "preprocess_only": {SAS: "PPONLY", GNU: "-E", DICE: "-E", LATTICE: "-E"},
    "disassemble": {SAS: "DISASM", GNU: "-S", DICE: "-a", LATTICE: "-a"},
    "verbose": {SAS: "VERBOSE", GNU: "-v", DICE: "-v", LATTICE: "-v"},
    "no_stdio": {SAS: "NOSTANDARDIO", GNU: "", DICE: "", LATTICE: "-DNONAMES"},
}

# Additional spellings recognised on the source side only
OPTION_ALIASES: dict[Dialect, dict[str, str]] = {
    GNU: {"-O": "optimize", "-O1": "optimize", "-O3": "optimize", "-ggdb": "debug"},
    SAS: {
        "OPT": "optimize",
        "DEBUG=LINE": "debug",
        "DEBUG=F": "debug_full",
        "DEBUG=FULL": "debug_full",
        "DEBUG=FULLFLUSH": "debug_full",
        "IGNORE=A": "no_warnings",
        "IGNORE=ALL": "no_warnings",
    },
    DICE: {},
    LATTICE: {"-y": "debug"},
}

# Direction-specific exceptions to the representative tokens
OPTION_OVERRIDES: dict[tuple[str, Dialect, Dialect], str] = {
    ("debug_full", LATTICE, DICE): "-s -d1",
    ("no_stdio", SAS, LATTICE): "",
}

# Options carrying a payload: class -> (prefix, suffix) per dialect.
# None means the target has no equivalent and the option is dropped.
PREFIX_FORMS: dict[str, dict[Dialect, tuple[str, str] | None]] = {
    "def_blocking": {SAS: None, GNU: None, DICE: None, LATTICE: ("-DDEFBLOCKING=", "")},
    "include_dir": {SAS: ("INCLUDEDIR=", ":"), GNU: ("-I", ""), DICE: ("-I", ""), LATTICE: ("-I", "")},
    "define": {SAS: ("DEF=", ""), GNU: ("-D", ""), DICE: ("-D", ""), LATTICE: ("-D", "")},
}

PREFIX_ALIASES: dict[Dialect, list[tuple[str, str, str]]] = {
    SAS: [("IDIR=", "", "include_dir"), ("DEFINE=", "", "define")],
}

# Compiler driver per dialect, and every name recognised as a compiler
COMPILERS = {GNU: "gcc", SAS: "sc", DICE: "dcc", LATTICE: "lc"}
COMPILER_NAMES = {"gcc", "cc", "sc", "dcc", "lc"}
CC_REFERENCES = {"$(CC)", "${CC}"}

# Standalone linkers; dialects missing here keep linker lines untouched
LINKERS = {SAS: "slink", LATTICE: "blink"}
LINKER_NAMES = {"slink", "blink"}

DELETE_VERBS = {GNU: "rm", SAS: "delete", DICE: "delete", LATTICE: "Delete"}
DELETE_NAMES = {"rm", "delete"}
AMIGA_DELETE_KEYWORDS = {"QUIET", "FORCE"}

MAKE_PREFIX_CHARS = "@-+"

# DICE automatic variables and their GNU Make equivalents
AUTOMATIC_VARIABLES = {"%(left)": "$@", "%(right)": "$<"}


def _build_option_table() -> dict[tuple[str, Dialect, Dialect], str]:
    table = {}
    for option_class, tokens in OPTION_TOKENS.items():
        for source in KNOWN_DIALECTS:
            for target in KNOWN_DIALECTS:
                table[(option_class, source, target)] = tokens[target]
    table.update(OPTION_OVERRIDES)
    return table


def _build_source_index() -> dict[Dialect, dict[str, str]]:
    index: dict[Dialect, dict[str, str]] = {dialect: {} for dialect in KNOWN_DIALECTS}
    for option_class, tokens in OPTION_TOKENS.items():
        for dialect, token in tokens.items():
            key = _normalize(token, dialect)
            if key and key not in index[dialect]:
                index[dialect][key] = option_class
    for dialect, aliases in OPTION_ALIASES.items():
        for token, option_class in aliases.items():
            index[dialect].setdefault(_normalize(token, dialect), option_class)
    return index


def _build_prefix_index() -> dict[Dialect, list[tuple[str, str, str]]]:
    index: dict[Dialect, list[tuple[str, str, str]]] = {dialect: [] for dialect in KNOWN_DIALECTS}
    for option_class, forms in PREFIX_FORMS.items():
        for dialect, form in forms.items():
            if form is not None:
                index[dialect].append((form[0], form[1], option_class))
    for dialect, aliases in PREFIX_ALIASES.items():
        index[dialect].extend(aliases)
    # Longest prefix first so -DDEFBLOCKING= is tried before -D
    for entries in index.values():
        entries.sort(key=lambda entry: len(entry[0]), reverse=True)
    return index


def _normalize(token: str, dialect: Dialect) -> str:
    """SAS/C keywords are case-insensitive; dash flags are not (-o is not -O)."""
    return token.upper() if dialect is SAS else token


OPTION_TABLE = _build_option_table()
SOURCE_INDEX = _build_source_index()
PREFIX_INDEX = _build_prefix_index()


def option_class(flag: str, dialect: Dialect) -> str | None:
    """Return the canonical class of a whole-token option, if known."""
    if dialect not in SOURCE_INDEX:
        return None
    return SOURCE_INDEX[dialect].get(_normalize(flag, dialect))


def split_prefixed(flag: str, dialect: Dialect) -> tuple[str, str] | None:
    """Split a payload-carrying option into (class, payload)."""
    key = _normalize(flag, dialect)
    for prefix, suffix, option_class in PREFIX_INDEX.get(dialect, []):
        if key.startswith(_normalize(prefix, dialect)) and len(flag) > len(prefix):
            payload = flag[len(prefix) :]
            if suffix and payload.endswith(suffix):
                payload = payload[: -len(suffix)]
            return option_class, payload
    return None


def map_option(flag: str, source: Dialect, target: Dialect) -> str:
    """
    Translate one compiler option from source to target dialect.

    Returns the flag unchanged when it is not recognised or when both
    dialects are the same, and an empty string when the target has no
    equivalent.
    """
    if source is target or source not in KNOWN_DIALECTS or target not in KNOWN_DIALECTS:
        return flag

    known = option_class(flag, source)
    if known is not None:
        return OPTION_TABLE[(known, source, target)]

    prefixed = split_prefixed(flag, source)
    if prefixed is not None:
        prefix_class, payload = prefixed
        form = PREFIX_FORMS[prefix_class][target]
        if form is None:
            return ""
        prefix, suffix = form
        return f"{prefix}{payload}{suffix}"

    return flag


def map_flags(flags: str, source: Dialect, target: Dialect) -> str:
    """Translate a whitespace-separated option string, dropping removed options."""
    if source is target:
        return flags
    mapped = (map_option(flag, source, target) for flag in flags.split())
    return " ".join(flag for flag in mapped if flag)


def map_compiler(name: str, source: Dialect, target: Dialect) -> str:
    """Translate the value of a CC variable."""
    if source is target or target not in COMPILERS:
        return name
    if name.strip().lower() in COMPILER_NAMES:
        return COMPILERS[target]
    return name


def split_make_prefix(word: str) -> tuple[str, str]:
    """Split GNU Make recipe prefixes (@, -, +) from a command word."""
    verb = word.lstrip(MAKE_PREFIX_CHARS)
    return word[: len(word) - len(verb)], verb


def _settle_objname(args: list[str]) -> list[str]:
    """Turn a bare OBJNAME into OBJNAME=$*.o unless an explicit one exists."""
    explicit = any(arg.upper().startswith("OBJNAME=") for arg in args)
    settled = []
    placed = explicit
    for arg in args:
        if arg.upper() == "OBJNAME":
            if not placed:
                settled.append("OBJNAME=$*.o")
                placed = True
            continue
        settled.append(arg)
    return settled


def _dedupe(args: list[str], token: str) -> list[str]:
    seen = False
    result = []
    for arg in args:
        if arg == token:
            if seen:
                continue
            seen = True
        result.append(arg)
    return result


def _map_compiler_command(verb: str, args: list[str], source: Dialect, target: Dialect) -> str:
    name = verb if verb in CC_REFERENCES else COMPILERS[target]
    mapped: list[str] = []
    # OBJNAME names an object file, so only compile lines get one
    compiling = "-c" in args

    i = 0
    while i < len(args):
        arg = args[i]
        if target is SAS and source is not SAS and compiling and arg.startswith("-o"):
            if arg == "-o" and i + 1 < len(args):
                mapped.append(f"OBJNAME={args[i + 1]}")
                i += 2
                continue
            if len(arg) > 2:
                mapped.append(f"OBJNAME={arg[2:]}")
                i += 1
                continue
        if source is SAS and target is not SAS and arg.upper().startswith("OBJNAME="):
            mapped.extend(["-c", "-o", arg[len("OBJNAME=") :]])
            i += 1
            continue
        translated = map_option(arg, source, target)
        mapped.extend(translated.split())
        i += 1

    if target is SAS:
        mapped = _settle_objname(mapped)
    else:
        mapped = _dedupe(mapped, "-c")

    return " ".join([name] + mapped)


def _map_linker_command(args: list[str], target: Dialect) -> str | None:
    if target not in LINKERS:
        return None
    return " ".join([LINKERS[target]] + args)


def _map_delete_command(args: list[str], target: Dialect) -> str:
    recursive = False
    files = []
    for arg in args:
        if arg.startswith("-"):
            if "r" in arg[1:].lower():
                recursive = True
            continue
        keyword = arg.upper()
        if keyword in AMIGA_DELETE_KEYWORDS:
            continue
        if keyword == "ALL":
            recursive = True
            continue
        files.append(arg)

    if target is GNU:
        return " ".join(["rm", "-rf" if recursive else "-f"] + files)

    if target is SAS:
        # SAS/C delete has no pattern support
        files = [f for f in files if "*" not in f and "?" not in f]

    words = [DELETE_VERBS[target]] + files
    if recursive:
        words.append("ALL")
    if target is SAS:
        words.append("QUIET")
    return " ".join(words)


def _map_automatic_variables(command_line: str, source: Dialect, target: Dialect) -> str:
    if source is DICE and target is GNU:
        for dice_name, gnu_name in AUTOMATIC_VARIABLES.items():
            command_line = command_line.replace(dice_name, gnu_name)
    elif source is GNU and target is DICE:
        for dice_name, gnu_name in AUTOMATIC_VARIABLES.items():
            command_line = command_line.replace(gnu_name, dice_name)
    return command_line


def map_command(command_line: str, source: Dialect, target: Dialect) -> str:
    """
    Translate one recipe line from source to target dialect.

    Recognises compiler invocations (renamed, options translated),
    linker invocations (blink/slink) and delete commands (verb renamed,
    wildcards stripped for SAS/C). Anything else is returned unchanged
    apart from DICE/GNU automatic variable names.
    """
    if source is target or target not in KNOWN_DIALECTS:
        return command_line

    command_line = _map_automatic_variables(command_line, source, target)
    words = command_line.split()
    if not words:
        return command_line

    prefix, verb = split_make_prefix(words[0])
    if not verb:
        return command_line
    args = words[1:]
    lowered = verb.lower()

    if lowered in COMPILER_NAMES or verb in CC_REFERENCES:
        mapped = _map_compiler_command(verb, args, source, target)
    elif lowered in LINKER_NAMES:
        mapped = _map_linker_command(args, target)
    elif lowered in DELETE_NAMES:
        mapped = _map_delete_command(args, target)
    else:
        return command_line

    if mapped is None:
        return command_line
    if prefix and target is GNU:
        mapped = prefix + mapped
    return mapped
