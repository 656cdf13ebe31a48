""" Parse shell commands into a command tree. """
from command import CommandNode, Operator, Redirect, SimpleCommand, Word
from constants import ASSIGNMENT_RX, OPERATOR_TOKENS, REDIRECT_TOKENS
from lexer import tokenize

# binding strength of each list operator, loosest first
PRECEDENCE = [
    {";": Operator.SEQUENTIAL},
    {"&": Operator.PARALLEL},
    {"&&": Operator.IF_ZERO, "||": Operator.IF_NONZERO},
    {"|": Operator.PIPE},
]


def is_operator(tok: str) -> bool:
    return tok in OPERATOR_TOKENS or tok in REDIRECT_TOKENS


def make_verb(tok: str) -> Word:
    """ Split a NAME=value verb into its three parts. """
    m = ASSIGNMENT_RX.match(tok)
    if m:
        return Word(m.group("name"), "=", m.group("value"))
    return Word(tok)


class Parser:
    def __init__(self, tokens: list[str]):
        self.tokens = tokens
        self.pos = 0

    def peek(self):
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def advance(self):
        tok = self.peek()
        self.pos += 1
        return tok

    def parse(self):
        if not self.tokens:
            return None
        node = self.parse_level(0)
        if self.peek() is not None:
            raise SyntaxError(f"syntax error near unexpected token '{self.peek()}'")
        return node

    def parse_level(self, level):
        if level == len(PRECEDENCE):
            return self.parse_simple()

        ops = PRECEDENCE[level]
        node = self.parse_level(level + 1)
        while self.peek() in ops:
            op = ops[self.advance()]
            # a trailing ';' closes the line
            if op is Operator.SEQUENTIAL and self.peek() is None:
                break
            right = self.parse_level(level + 1)
            node = CommandNode(op, node, right)
        return node

    def require_filename(self, after):
        tok = self.advance()
        if tok is None or tok == "" or is_operator(tok):
            raise SyntaxError(f"syntax error: expected filename after '{after}'")
        return Word(tok)

    def parse_simple(self):
        """ Parse one simple command up to the next list operator. """
        args = []
        stdin = stdout = stderr = None

        while self.peek() is not None and self.peek() not in OPERATOR_TOKENS:
            tok = self.advance()

            if tok == "<":
                stdin = Redirect(self.require_filename(tok))
                continue
            if tok in (">", ">>"):
                stdout = Redirect(self.require_filename(tok), append=(tok == ">>"))
                continue
            if tok in ("&>", "&>>"):
                target = self.require_filename(tok)
                stdout = Redirect(target, append=(tok == "&>>"))
                stderr = Redirect(target, append=(tok == "&>>"))
                continue

            # spaced or split fd redirection: 2 > file, 1>>file
            if tok in ("1", "2") and self.peek() in (">", ">>"):
                op = self.advance()
                redirect = Redirect(self.require_filename(tok + op), append=(op == ">>"))
                if tok == "2":
                    stderr = redirect
                else:
                    stdout = redirect
                continue

            args.append(tok)

        if not args:
            found = self.peek()
            if found is None:
                raise SyntaxError("syntax error: expected a command")
            raise SyntaxError(f"syntax error near unexpected token '{found}'")

        return CommandNode.leaf(SimpleCommand(
            make_verb(args[0]),
            [Word(a) for a in args[1:]],
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
        ))


def parse(tokens: list[str]):
    """ Build the command tree for a token list; None for an empty line. """
    return Parser(tokens).parse()


def parse_line(line: str):
    return parse(tokenize(line))
