""" Lexical analysis for shell commands. """
import shlex

from constants import OPERATOR_TOKENS, REDIRECT_TOKENS

PUNCTUATION = ";&|<>"


def tokenize(line: str) -> list[str]:
    """
    Split a line into words and operator tokens.

    Quotes are removed the POSIX way. A run of punctuation characters must
    form one known operator, otherwise SyntaxError is raised.
    """
    lex = shlex.shlex(line, posix=True, punctuation_chars=PUNCTUATION)
    lex.whitespace_split = True
    lex.commenters = ""
    try:
        tokens = list(lex)
    except ValueError as e:
        # unbalanced quotes
        raise SyntaxError(f"syntax error: {e}") from e

    for tok in tokens:
        if tok and all(c in PUNCTUATION for c in tok):
            if tok not in OPERATOR_TOKENS and tok not in REDIRECT_TOKENS:
                raise SyntaxError(f"syntax error near unexpected token '{tok}'")
    return tokens
