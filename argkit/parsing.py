r"""
Argkit parsing layer: classify tokens into positional arguments and options.

Overview
- parse(input, config, **options) -> ParseResult
  • input: a command line string (tokenized with argkit.tokenizer.split), an
    iterable of already split tokens, or nothing at all (sys.argv[1:]).
  • config: a ParseConfig, a mapping of settings, or nothing (defaults).
  • options: keyword overrides merged over config.

- ParseConfig: immutable settings resolved once per call.
  • no:         "--no-NAME" yields NAME: False                (default True)
  • flag_array: "-abc" is the flags a, b and c                 (default True)
  • multiple:   repeated names collect a list of their values (default False)

- ParseResult: positional `args` (list[str]) and named `opts`
  (dict[str, bool | str | list]).

Token rules
- "--" ends option processing; everything after it is positional and
  never classified.
- "--name" is an option; the next plain token, if any, becomes its value.
- "--name=value" / "-n=value" bind value inline (possibly empty).
- "-abc" expands into the flags a, b and c, which never take a following value.
  A single "-a" may take one.
- Anything else is a positional argument.

The parser is total: malformed input is classified on a best-effort basis and
nothing is ever raised because of token content.

Quick example
    >>> parse('abc -d val1 -e=val2 -fg def --opt1 --opt2 val2 -- --opt3')
    parse-result(args=['abc', 'def', '--opt3'], opts={'d': 'val1', 'e': 'val2', 'f': True, 'g': True, 'opt1': True, 'opt2': 'val2'})
"""
import functools
import operator
import re
import sys
from collections.abc import Iterable, Mapping
from enum import Enum, auto

from .tokenizer import split, unquote
from .utils import *

DASH = "-"
SEPARATOR = "--"
NEGATION = "--no-"
EQUAL = "="


class TokenKind(Enum):
    """
    Role of a preprocessed token in the main pass.

    - BREAK: the "--" separator itself.
    - NAME: a dash token with any "=value" tail removed.
    - INLINE: the unquoted tail of a "name=value" token; always follows its NAME.
    - WORD: anything else, unquoted.
    """
    BREAK = auto()
    NAME = auto()
    INLINE = auto()
    WORD = auto()


class ParseType(type):
    """
    Metaclass shared by ParseConfig and ParseResult.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_{name}" attribute (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens), e.g. ParseResult -> "parse-result".
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class ParseConfig(metaclass=ParseType):
    """
    Immutable parser settings.

    Fields
    - no: bool
      Treat "--no-NAME" as NAME: False.
    - flag_array: bool
      Treat "-abc" as the single-character flags a, b and c rather than one
      option named "abc".
    - multiple: bool
      Accumulate repeated names into a list instead of overwriting.

    Instances are hashable, compare by value and support copy.replace().
    """
    __introspectable__ = (
        "no",
        "flag_array",
        "multiple",
    )
    __defaults__ = {
        "no": True,
        "flag_array": True,
        "multiple": False,
    }
    __aliases__ = {
        "flagArray": "flag_array",
    }

    def __new__(cls, *, no=True, flag_array=True, multiple=False):
        self = super().__new__(cls)
        self._no = bool(no)
        self._flag_array = bool(flag_array)
        self._multiple = bool(multiple)
        return self

    @classmethod
    def resolve(cls, config=Unset, /, **options):
        """
        Merge settings over the defaults into a ParseConfig.

        Parameters
        - config: Unset | ParseConfig | Mapping[str, Any]
          A mapping may use "flagArray" as an alias of "flag_array". Keys that
          are not given keep their default.
        - options: keyword overrides applied after config.

        Raises
        - TypeError: when config has an unsupported type or a key is unknown.
        """
        if isinstance(config, cls):
            settings = {name: getattr(config, name) for name in cls.__introspectable__}
        elif isinstance(config, Mapping):
            settings = dict(cls.__defaults__)
            settings.update(cls._normalized(config))
        elif config is Unset:
            settings = dict(cls.__defaults__)
        else:
            raise TypeError("parse() config must be a ParseConfig or a mapping")

        if options:
            settings.update(cls._normalized(options))

        return cls(**settings)

    @classmethod
    def _normalized(cls, mapping):
        normalized = {}
        for key, value in mapping.items():
            key = cls.__aliases__.get(key, key)
            if key not in cls.__defaults__:
                raise TypeError(f"unknown parse option {key!r}")
            normalized[key] = value
        return normalized

    def __replace__(self, **overrides):
        return type(self).resolve(self, **overrides)

    def __eq__(self, other):
        if not isinstance(other, ParseConfig):
            return NotImplemented
        return (self.no, self.flag_array, self.multiple) == (other.no, other.flag_array, other.multiple)

    def __hash__(self):
        return hash((self.no, self.flag_array, self.multiple))


class ParseResult(metaclass=ParseType):
    """
    Outcome of parse(): positional arguments and named options.

    - args: list[str], in input order.
    - opts: dict[str, bool | str | list[bool | str]], in first-seen order.

    Both properties return copies. A result unpacks as (args, opts).
    """
    __introspectable__ = (
        "args",
        "opts",
    )

    def __new__(cls, args=(), opts=Unset):
        self = super().__new__(cls)
        self._args = list(args)
        self._opts = dict(coalesce(opts, {}))
        return self

    def __iter__(self):
        yield self.args
        yield self.opts

    def __eq__(self, other):
        if not isinstance(other, ParseResult):
            return NotImplemented
        return self._args == other._args and self._opts == other._opts

    __hash__ = None


def _assign(opts, name, value, multiple):
    """
    Store a new value for name, overwriting or accumulating per `multiple`.
    """
    if multiple and name in opts:
        if isinstance(opts[name], list):
            opts[name].append(value)
        else:
            opts[name] = [opts[name], value]
    else:
        opts[name] = value


def _rebind(opts, name, value, slot=-1):
    """
    Replace a value of name (the placeholder True of an option that turned out
    to have a value). `slot` picks the entry once values are accumulated; the
    most recent one by default.
    """
    if isinstance(opts[name], list):
        opts[name][slot] = value
    else:
        opts[name] = value


def _preprocess(tokens):
    """
    Yield (kind, text) pairs for the main pass.

    After the separator every token is a WORD and is neither split on '=' nor
    classified again.
    """
    separated = False
    for token in tokens:
        if separated:
            yield TokenKind.WORD, unquote(token)
        elif token == SEPARATOR:
            separated = True
            yield TokenKind.BREAK, token
        elif token.startswith(DASH):
            name, equal, value = token.partition(EQUAL)
            if not name.lstrip(DASH):
                # "-", "-=x", "--=x": nothing to name
                yield TokenKind.WORD, token
                continue
            yield TokenKind.NAME, name
            if equal:
                yield TokenKind.INLINE, unquote(value)
        else:
            yield TokenKind.WORD, unquote(token)


def _classify(items, config):
    """
    Main pass: fold preprocessed (kind, text) pairs into a ParseResult.

    `pending` is the option that may still take a value: the next INLINE, or
    the next WORD unless the option came from a flag group. Anything else
    clears it.
    """
    args = []
    opts = {}
    separated = False
    pending = Unset
    grouped = False
    slot = -1

    for kind, text in items:
        if separated:
            args.append(text)
            continue

        match kind:
            case TokenKind.BREAK:
                separated = True
            case TokenKind.INLINE if pending is not Unset:
                _rebind(opts, pending, text, slot)
            case TokenKind.WORD if pending is not Unset and not grouped:
                _rebind(opts, pending, text)
            case TokenKind.INLINE | TokenKind.WORD:
                args.append(text)
            case TokenKind.NAME if config.no and text.startswith(NEGATION) and len(text) > len(NEGATION):
                _assign(opts, text[len(NEGATION):], False, config.multiple)
            case TokenKind.NAME if text.startswith(SEPARATOR):
                _assign(opts, name := text.lstrip(DASH), True, config.multiple)
                pending, grouped, slot = name, False, -1
                continue
            case TokenKind.NAME if config.flag_array and len(text) > 2:
                _assign(opts, first := text[1], True, config.multiple)
                # position of the first flag among its values, kept if later flags of
                # the group repeat it
                slot = len(opts[first]) - 1 if isinstance(opts[first], list) else 0
                for flag in text[2:]:
                    _assign(opts, flag, True, config.multiple)
                # only an inline value reaches the group, on its first flag
                pending, grouped = first, True
                continue
            case TokenKind.NAME:
                _assign(opts, name := text[1:], True, config.multiple)
                pending, grouped, slot = name, False, -1
                continue

        pending, grouped, slot = Unset, False, -1

    return ParseResult(args, opts)


def parse(input=Unset, config=Unset, /, **options):
    """
    Parse a command line into positional arguments and options.

    Parameters
    - input:
      • Unset: parse sys.argv[1:].
      • str: split with argkit.tokenizer.split first.
      • Iterable[str]: tokens used as-is ("=" splitting and unquoting still apply).
    - config: Unset | ParseConfig | Mapping
      Settings merged over the defaults (see ParseConfig.resolve).
    - options: keyword overrides, e.g. parse(line, multiple=True).

    Returns
    - ParseResult

    Raises
    - TypeError: when input is not a string or an iterable of strings, or when
      config is invalid. Token content never raises.

    Examples
    - parse("-abc")                         -> opts {a: True, b: True, c: True}
    - parse("--abc=")                       -> opts {abc: ""}
    - parse("-- --abc")                     -> args ["--abc"]
    - parse("--no-abc val", no=False)       -> opts {"no-abc": "val"}
    - parse("-a 1 -a 2", {"multiple": True}) -> opts {a: ["1", "2"]}
    """
    config = ParseConfig.resolve(config, **options)

    if input is Unset:
        tokens = sys.argv[1:]
    elif isinstance(input, str):
        tokens = split(input)
    elif isinstance(input, Iterable):
        tokens = list(input)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
    else:
        raise TypeError("parse() argument must be a string or an iterable of strings")

    return _classify(_preprocess(tokens), config)


__all__ = (
    "ParseConfig",
    "ParseResult",
    "parse",
)
