"""
gzstream.plumbing - command-line argument parsing and script frame

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import os
import sys
import logging
from types import SimpleNamespace
from contextlib import contextmanager

ARG_PREFIX = '-'
GLOBAL_ARG_PREFIX = '--'
FALSE_PREFIX = 'no-'

# column for option descriptions in usage text
HELP_TAB = 25

# value of an option given without one
SET = object()


def parse_subcommands(operations, global_options, argv=None):
    """
    Split argument list into one record per command, plus global options.

    Each record has `command`, `func`, positional `args` and option `kwargs`.
    Options look like `-key=value`, `-key value` or `-key`; `-no-key` unsets.
    Options with the global prefix go to the global record if known there.
    """
    if argv is None:
        argv = sys.argv[1:]
    global_ns = SimpleNamespace(args=[], kwargs={})
    commands = []
    for words in _split_argv(argv, operations):
        command = words.pop(0) if words and words[0] in operations else ''
        ns = SimpleNamespace(
            command=command, func=operations.get(command), args=[], kwargs={}
        )
        pending = None
        for word in words:
            if word.startswith(ARG_PREFIX) and word != ARG_PREFIX:
                is_global = word.startswith(GLOBAL_ARG_PREFIX)
                key, _, value = word.lstrip(ARG_PREFIX).partition('=')
                target = global_ns if is_global and key in global_options else ns
                if key.startswith(FALSE_PREFIX):
                    target.kwargs[key[len(FALSE_PREFIX):]] = False
                    pending = None
                else:
                    target.kwargs[key] = value or SET
                    pending = None if value else (target, key)
            elif pending:
                target, key = pending
                target.kwargs[key] = word
                pending = None
            else:
                ns.args.append(word)
        ns.kwargs = {_k.replace('-', '_'): _v for _k, _v in ns.kwargs.items()}
        commands.append(ns)
    return commands, global_ns


def _split_argv(argv, command_words):
    """Yield runs of arguments, each starting at a command word."""
    part = []
    for word in argv:
        if word in command_words:
            yield part
            part = []
        part.append(word)
    yield part


def convert_arguments(func, kwargs):
    """Convert option values to the types annotated on the function."""
    converted = {}
    for key, value in kwargs.items():
        vartype = func.__annotations__.get(key)
        if vartype is None:
            raise ValueError(f'Unknown option `{key}` for command `{func.__name__}`.')
        if vartype == bool:
            converted[key] = value is SET or str(value).lower() in ('1', 'true', 'yes', 'on')
        elif value is SET:
            raise ValueError(f'Option `{key}` requires a value.')
        else:
            converted[key] = vartype(value)
    return converted


def print_help(usage, operations, global_options):
    """Print usage, global options and the options of each command."""
    print(usage)
    print()
    for name, (_, doc) in global_options.items():
        print(f'  {GLOBAL_ARG_PREFIX}{name}\t{doc}'.expandtabs(HELP_TAB))
    for command, func in operations.items():
        lines = [_l.strip() for _l in (func.__doc__ or '').splitlines() if _l.strip()]
        # docstring lines of the form `option: description`
        docs = dict(
            (_k.strip(), _v.strip())
            for _k, _, _v in (_l.partition(':') for _l in lines[1:])
        )
        print()
        print(f"{command}: {lines[0] if lines else ''}")
        for name, vartype in func.__annotations__.items():
            flag = ARG_PREFIX + name.replace('_', '-') + ('' if vartype == bool else '=...')
            print(f"  {flag}\t{docs.get(name, '')}".expandtabs(HELP_TAB))


@contextmanager
def wrap_main(debug=False):
    """Configure logging and report errors for a main script."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(levelname)s: %(message)s', force=True,
    )
    try:
        yield
    except BrokenPipeError:
        # output closed early, e.g. piped into `head`
        sys.stdout = os.fdopen(1)
    except Exception as exc:
        logging.error(exc)
        if debug:
            raise
        sys.exit(1)
