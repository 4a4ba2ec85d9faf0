#!/usr/bin/env python3

r"""
usage: echor [-h] [-n] [-V] TEXT [TEXT ...]

print some text, joined by single spaces

positional arguments:
  TEXT                a text to print

options:
  -h, --help          show this help message and exit
  -n, --omit_newline  print just the text, don't add an end-of-line
  -V, --version       show program's version number and exit

quirks:
  takes "-n" before, between, or after the text, unlike bash "echo -n" only up front
  takes "--" as meaning print all the rest as text, such as:  echor -- -n
  shouts "USAGE:" to stderr and exits 2, when given no text

examples:
  echor 'Hello there'
  echor Hello there
  echor -n 'Hello  there' |hexdump -C
  echor Hello there -n
  echor -V
"""


import collections
import contextlib
import os
import sys

import argdoc


__version__ = "0.1.0"


UsageError = argdoc.UsageError  # raised by 'parse' when given no Text to print


InvocationConfig = collections.namedtuple(
    "InvocationConfig", "text_segments omit_newline".split(), defaults=(False,)
)


def main(argv=None):
    """Run from the Command Line"""

    alt_argv = sys.argv if (argv is None) else argv

    parser = argdoc.ArgumentParser(doc=__doc__, version=__version__)
    argdoc.parser_exit_unless_doc_eq(parser, doc=__doc__, file=__file__)

    try:
        config = parse(alt_argv[1:])
    except UsageError as exc:
        argdoc.stderr_print(exc.format_message().rstrip())

        return 2  # exit 2 to reject usage

    with BrokenPipeErrorSink():
        emit(config)

    return 0


def parse(args):
    """Take the Args after the Prog name as an InvocationConfig, else raise UsageError"""

    parser = argdoc.ArgumentParser(doc=__doc__, version=__version__)

    space = parser.parse_intermixed_args_before_dashes(args)

    config = InvocationConfig(
        text_segments=tuple(space.texts),
        omit_newline=bool(space.omit_newline),
    )

    return config


def emit(config, stdout=None):
    """Print the Text Segments joined by Spaces, and end the Line unless told not to"""

    alt_stdout = sys.stdout if (stdout is None) else stdout

    line = " ".join(config.text_segments)
    end = "" if config.omit_newline else "\n"

    alt_stdout.write(line + end)
    alt_stdout.flush()


# deffed in many files  # missing from docs.python.org
class BrokenPipeErrorSink(contextlib.ContextDecorator):
    """Cut unhandled BrokenPipeError down to sys.exit(1)

    Test with Stdout closed early, such as:  echor.py Hello there |true

    More narrowly than:  signal.signal(signal.SIGPIPE, handler=signal.SIG_DFL)
    As per https://docs.python.org/3/library/signal.html#note-on-sigpipe
    """

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        (_, exc, _) = exc_info
        if isinstance(exc, BrokenPipeError):  # catch this one

            null_fileno = os.open(os.devnull, flags=os.O_WRONLY)
            os.dup2(null_fileno, sys.stdout.fileno())  # avoid the next one

            sys.exit(1)


if __name__ == "__main__":
    sys.exit(main(sys.argv))
