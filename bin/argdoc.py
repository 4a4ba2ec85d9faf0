# -*- coding: utf-8 -*-

"""
Compile an ArgumentParser out of a top-of-file docstring of help lines

The Doc is laid out like 'argparse --help' lays it out:  a paragraph of usage,
a paragraph of description, a paragraph of "positional arguments:", a paragraph
of "options:", and then an epilog of quirks and examples shown verbatim

Plural args go to an English plural key, such as 'TEXT [TEXT ...]' to '.texts'
Options without a metavar are counted, such as '-v' to '.v == 1'
Usage errors raise UsageError, which shouts 'USAGE:' where help says 'usage:'
"""

import argparse
import difflib
import os
import re
import sys


_89_COLUMNS = 89  # the Black app for styling Python promotes 89 columns per line

HELP_HELP = "show this help message and exit"  # as in 'argparse'
VERSION_HELP = "show program's version number and exit"  # as in 'argparse'

PLURAL_EN_SUFFIXES = [
    ("ex", "ices"),  # vortex, vortices
    ("ix", "ices"),  # appendix, appendices
    ("is", "es"),  # basis, bases
    ("f", "ves"),  # leaf, leaves
    ("on", "a"),  # criterion, criteria
    ("o", "oes"),  # tomato, tomatoes
]


class UsageError(Exception):
    """Reject a Command Line that the Doc doesn't allow"""

    def __init__(self, usage, prog, reason):
        super(UsageError, self).__init__(reason)
        self.usage = usage
        self.prog = prog
        self.reason = reason

    def format_message(self):
        """Say what went wrong, the way 'argparse' says it, but shout the Usage"""

        chars = "{}\n{}: error: {}\n".format(self.usage, self.prog, self.reason)

        return chars


class ArgumentParser(argparse.ArgumentParser):
    """Form an ArgumentParser with Args and Options and Epilog, from a Doc"""

    def __init__(self, doc, version=None):

        # pylint: disable=super-with-arguments

        sections = split_doc(doc)

        usage_words = sections.usage.split()
        prog = usage_words[1] if usage_words[1:] else "prog"

        epilog = None
        if sections.epi:
            epilog = doc[doc.index(sections.epi) :].rstrip()

        heads_helps = list(split_head_help(_) for _ in sections.option_lines)
        add_help = ("-h, --help", HELP_HELP) in heads_helps

        # Form Self, but begin with no Args and no Options

        super(ArgumentParser, self).__init__(
            prog=prog,
            description=sections.description,
            add_help=add_help,
            allow_abbrev=False,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=epilog,
        )

        self.version = version

        # Add zero or more Args and/or Options from the Doc

        for line in sections.arg_lines:
            parser_add_arg_line(self, usage=sections.usage, line=line)

        for line in sections.option_lines:
            parser_add_option_line(self, line=line)

    def error(self, message):
        """Raise a UsageError, in place of printing and exiting"""

        usage = shout_usage(self.format_usage())

        raise UsageError(usage, prog=self.prog, reason=message)

    def parse_intermixed_args_before_dashes(self, args):
        """Parse Args up to the first "--" as usual, but take the rest as Positional"""

        alt_args = list(args)

        actions = self._get_positional_actions()  # pylint: disable=protected-access
        if ("--" not in alt_args) or not actions:

            return self.parse_intermixed_args(alt_args)

        index = alt_args.index("--")
        head = alt_args[:index]
        tail = alt_args[(index + 1) :]

        # Let the last Positional Arg go missing from the Head

        action = actions[-1]
        (with_nargs, with_required) = (action.nargs, action.required)

        action.nargs = "*"  # argparse.ZERO_OR_MORE
        action.required = False
        try:
            space = self.parse_intermixed_args(head)
        finally:
            action.nargs = with_nargs
            action.required = with_required

        # Give it the Tail, and require it again

        values = list(getattr(space, action.dest, None) or list()) + tail
        if (not values) and (with_nargs == "+"):
            self.error(
                "the following arguments are required: {}".format(action.metavar)
            )

        setattr(space, action.dest, values)

        return space


def shout_usage(usage):
    """Say 'USAGE:' in place of 'usage:', and drop any Color from the Usage"""

    alt_usage = strip_color(usage).strip()
    if alt_usage.startswith("usage:"):
        alt_usage = "USAGE:" + alt_usage[len("usage:") :]

    return alt_usage


def strip_color(chars):
    """Drop the Ansi Color Escapes that later Python ArgParse adds for a Tty"""

    alt_chars = re.sub(r"\x1B\[[0-9;]*m", repl="", string=chars)

    return alt_chars


#
# Rip Add_Argument calls out from the Doc
#


def split_doc(doc):
    """Divide a Doc into Usage, Description, Arg Lines, Option Lines, and Epilog"""

    alt_doc = argparse_doc_upgrade(doc)
    paras = list(_.splitlines() for _ in re.split(r"\n\s*\n", alt_doc) if _.strip())
    if not paras[1:]:
        raise ValueError("want usage and description in doc, got {!r}".format(doc))

    usage = paras[0][0]
    if not usage.startswith("usage: "):
        raise ValueError("want 'usage: ' to start doc, got {!r}".format(usage))

    sections = argparse.Namespace(
        usage=usage,
        description=" ".join(_.strip() for _ in paras[1]),
        arg_lines=list(),
        option_lines=list(),
        epi=None,
    )

    paras = paras[2:]

    if paras and paras[0][0].startswith("positional arguments"):
        sections.arg_lines = join_dented_lines(paras[0][1:])
        paras = paras[1:]

    if paras and paras[0][0].startswith("options"):
        sections.option_lines = join_dented_lines(paras[0][1:])
        paras = paras[1:]

    if paras:
        sections.epi = paras[0][0]

    return sections


def join_dented_lines(lines):
    """Join each line dented deeper than the line it continues onto that line"""

    dents_lines = list()
    for line in lines:
        dent = len(line) - len(line.lstrip())
        if dents_lines and (dent > dents_lines[-1][0]):
            dents_lines[-1][-1] += "  " + line.strip()
        else:
            dents_lines.append([dent, line.strip()])

    joined = list(_[-1] for _ in dents_lines)

    return joined

    # such as:  [' -c N', '    how many', ' -v']  ->  ['-c N  how many', '-v']


def split_head_help(line):
    """Divide a Doc Line into its Names and its Help, at the first wide gap"""

    splits = re.split(r"\s{2,}", line.strip(), maxsplit=1)
    head = splits[0]
    help_tail = splits[1] if splits[1:] else None

    return (head, help_tail)


def parser_add_arg_line(parser, usage, line):
    """Rip out one Add_Argument Call of a Positional Arg from one Doc Line"""

    (metavar, help_tail) = split_head_help(line)
    dest = metavar.lower()

    # Take mentions of NArgs ? or NArgs + or NArgs * from Usage

    nargs = None
    if "[{}]".format(metavar) in usage:
        nargs = "?"  # argparse.OPTIONAL
    elif " {} [{} ...]".format(metavar, metavar) in usage:
        dest = plural_en(metavar.lower())  # mutate
        nargs = "+"  # argparse.ONE_OR_MORE
    elif "[{} ...]".format(metavar) in usage:
        dest = plural_en(metavar.lower())  # mutate
        nargs = "*"  # argparse.ZERO_OR_MORE

    alt_help_tail = help_tail.replace("%", "%%") if help_tail else None
    parser.add_argument(dest, metavar=metavar, nargs=nargs, help=alt_help_tail)


def parser_add_option_line(parser, line):
    """Rip one Add_Argument Call of an Option or two from one Doc Line"""

    (head, help_tail) = split_head_help(line)

    dests = list()
    metavar = None
    for part in head.split(", "):
        words = part.split()
        dests.append(words[0])
        if words[1:]:
            metavar = words[1]

    assert len(dests) in (1, 2), repr(line)

    # Call victory when Parser Add_Help already did add this Option

    if dests == ["-h", "--help"]:
        if parser.add_help:

            return

    alt_help_tail = help_tail.replace("%", "%%") if help_tail else None

    # Add a Version Option, or an Option with a Metavar, or a Counted Option

    if (metavar is None) and (help_tail == VERSION_HELP):
        version = "%(prog)s"
        if parser.version is not None:
            version = "%(prog)s {}".format(parser.version)

        parser.add_argument(
            *dests, action="version", version=version, help=alt_help_tail
        )

    elif metavar is not None:
        parser.add_argument(*dests, metavar=metavar, help=alt_help_tail)

    else:
        default = 0  # for 'action="count"'
        parser.add_argument(
            *dests, action="count", default=default, help=alt_help_tail
        )


def plural_en(word):
    """Guess the English plural of a word"""

    for (suffix, plural_suffix) in PLURAL_EN_SUFFIXES:
        if word.endswith(suffix):

            return word[: -len(suffix)] + plural_suffix

    if re.search(r"[^aeiouy]y$", string=word):

        return word[: -len("y")] + "ies"  # lorry, lorries

    if re.search(r"(ch|s|sh|x|z)$", string=word):

        return word + "es"  # stitch bus ash box lutz, stitches buses ashes boxes lutzes

    return word + "s"  # word, words, text, texts

    # don't try to solve:  nucleus, nuclei


#
# Require the Doc to match the Help of the Parser compiled from it
#


# deffed in many files  # missing from docs.python.org
def parser_exit_unless_doc_eq(parser, doc, file):
    """Exit nonzero, unless the Doc equals 'parser.format_help()'"""

    fromfile = "{} --help".format(os.path.basename(file))
    tofile = "ArgumentParser(..."

    # Fetch the Parser Doc with Lines wrapped by a virtual Terminal of a fixed width

    with_columns = os.getenv("COLUMNS")  # often '!= os.get_terminal_size().columns'
    os.environ["COLUMNS"] = str(_89_COLUMNS)
    try:
        parser_doc = parser.format_help()
    finally:
        if with_columns is None:
            os.environ.pop("COLUMNS")
        else:
            os.environ["COLUMNS"] = with_columns

    # Cut the jitter in Doc from ArgParse evolving across Python 3

    fromdoc = argparse_doc_upgrade(doc)
    todoc = argparse_doc_upgrade(parser_doc)

    diffchars = diff_words_of_lines(
        fromdoc=fromdoc, todoc=todoc, fromfile=fromfile, tofile=tofile
    )

    if diffchars:
        stderr_print(diffchars)  # '... --help' vs 'ArgumentParser(...'
        stderr_print(
            "{}: error: Doc doesn't match Parser compiled from Doc".format(
                os.path.basename(file)
            )
        )

        sys.exit(1)  # exit 1 to require Parser == Doc


def argparse_doc_upgrade(doc):
    """Cut the jitter in Doc from ArgParse evolving across Python 3"""

    alt_doc = strip_color(doc).strip()

    # Join the lines of the Usage paragraph, wherever ArgParse wrapped them

    (usage, sep, rest) = alt_doc.partition("\n\n")
    alt_doc = " ".join(usage.split()) + sep + rest

    pattern = r" \[([A-Z]+) \[[A-Z]+ [.][.][.]\]\]"
    alt_doc = re.sub(pattern, repl=r" [\1 ...]", string=alt_doc)

    alt_doc = alt_doc.replace("\noptional arguments:", "\noptions:")

    return alt_doc


def diff_words_of_lines(fromdoc, todoc, fromfile, tofile):
    """Diff two Docs line by line, ignoring leading/ trailing/ multiple Space's"""

    fromlines = list(" ".join(_.split()) for _ in fromdoc.splitlines())
    tolines = list(" ".join(_.split()) for _ in todoc.splitlines())

    difflines = list(
        difflib.unified_diff(a=fromlines, b=tolines, fromfile=fromfile, tofile=tofile)
    )
    diffchars = "\n".join(_.splitlines()[0] for _ in difflines)

    return diffchars


# deffed in many files  # missing from docs.python.org
def stderr_print(*args):
    """Print the Args, but to Stderr, not to Stdout"""

    sys.stdout.flush()
    print(*args, file=sys.stderr)
    sys.stderr.flush()  # like for kwargs["end"] != "\n"
