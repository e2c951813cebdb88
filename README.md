# rdfless

A colorful pretty printer for RDF data. It reads Turtle, TriG, N-Triples and
N-Quads, groups statements by graph and subject, and prints them to the
terminal with ANSI colors.

## Installation

```
pip install .
```

## Usage

Print one or more files:

```
rdfless data.ttl
rdfless graphs.trig other.ttl
```

Or pipe data in on standard input:

```
cat data.ttl | rdfless
cat graphs.trig | rdfless --format trig
```

Options:

- `--expand` — write full IRIs instead of `PREFIX` declarations and prefixed names.
- `--compact` — use prefixes; wins over `--expand` when both are given.
- `--format {turtle,trig}` — override the input format.
- `--version` — print the version and exit.

When `--format` is not given, the format comes from the first file's
extension and is used for every file on the command line: `.ttl` is Turtle,
`.trig` is TriG, `.nt` is N-Triples, `.nq` is N-Quads, and any other
extension is read as Turtle. Input from standard input is read as Turtle
unless `--format` says otherwise.

If no files are given and standard input is a terminal, a message and the
help text are printed and the command exits with status 1. A file that
cannot be opened, a document that does not parse, or a configuration that
cannot be written also ends the run with status 1 and an `Error:` message
on standard error.

Statements are printed default graph first, then named graphs in order of
their IRI, each named graph in a `{ ... }` block. Consecutive statements with
the same subject are printed under a single subject line.

In compact mode, literals of the common XML Schema types are shortened:
integers, decimals, floats, doubles and booleans are written bare, while
strings, dates, times and date-times are written in quotes without their
datatype. In expanded mode every typed literal keeps its full datatype IRI.

## Configuration

On first run a configuration file is created at
`~/.local/rdfless/config.toml`:

```toml
[colors]
subject = "blue"
predicate = "green"
object = "white"
literal = "red"
prefix = "yellow"
base = "yellow"
graph = "yellow"

[output]
expand = false
```

Colors may be named (`black`, `red`, `green`, `yellow`, `blue`, `magenta`,
`cyan`, `white` and their `bright_` variants, case-insensitive) or given as
CSS hex codes such as `#336699` or `#369`. Unknown names and malformed hex
codes fall back to white. Setting `output.expand` to `true` makes expanded
output the default; the command-line flags still override it.

If the file cannot be parsed (invalid TOML, a missing color entry, or values
of the wrong type) it is replaced with a fresh default one and a warning is
printed on standard error.

## Library use

The modules can be used directly:

- `rdfless.parser` — `parse(text, input_format)` and the shortcuts
  `parse_turtle`, `parse_trig`, `parse_ntriples` and `parse_nquads` accept
  `str` or UTF-8 `bytes` and return a `ParseResult` holding `triples` (a list
  of `OwnedTriple`) and `prefixes` (the prefixes the document declared).
  Malformed input raises `ParseError`, which carries `line` and `column`.
- `rdfless.model` — `InputFormat`, `SubjectType`, `ObjectType`, `OwnedTriple`
  and `detect_format_from_path`.
- `rdfless.formatter` — `format_owned_subject`, `format_owned_predicate`,
  `format_owned_object`, `print_prefixes`, `print_triples` and
  `process_input`. The printing functions take an optional `out` stream and
  write to standard output by default.
- `rdfless.config` — `Config`, `ColorConfig`, `OutputConfig`, `Color`,
  `string_to_color`, `load_config` and `ConfigError`. `Config.to_toml()` and
  `Config.from_toml(text)` convert to and from TOML.

```python
import io
from rdfless.config import Config
from rdfless.formatter import Args, process_input
from rdfless.model import InputFormat

config = Config()
out = io.StringIO()
process_input(
    io.StringIO('<http://example.com/s> <http://example.com/p> "o" .'),
    Args(input_format=InputFormat.NTRIPLES),
    config.colors,
    config,
    out=out,
)
print(out.getvalue())
```

`Args` holds `expand_prefixes`, `compact` and `input_format`; subclass it and
override `expand(config)` or `format()` to decide these some other way.

## Limitations

- On the command line, `--format` only offers `turtle` and `trig`; N-Triples
  and N-Quads are chosen through the `.nt` and `.nq` file extensions.
- Output is always colored with ANSI escape sequences; there is no plain-text
  mode and no paging.
- The output is meant for reading, not as a serialization: literal values are
  printed as they are, without re-escaping quotes or line breaks.
- RDF-star (quoted triples) is not supported.