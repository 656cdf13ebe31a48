""" Command tree produced by the parser and consumed by the evaluator. """
import enum


class Operator(enum.Enum):
    LEAF = "leaf"
    SEQUENTIAL = ";"
    PARALLEL = "&"
    PIPE = "|"
    IF_NONZERO = "||"    # run right only when left failed
    IF_ZERO = "&&"       # run right only when left succeeded


class Word:
    """ A shell word made of one or more adjacent parts. """
    __slots__ = ("parts",)

    def __init__(self, *parts):
        if not parts:
            raise ValueError("a word needs at least one part")
        self.parts = tuple(parts)

    @property
    def text(self) -> str:
        return "".join(self.parts)

    def __eq__(self, other):
        if not isinstance(other, Word):
            return NotImplemented
        return self.parts == other.parts

    def __hash__(self):
        return hash(self.parts)

    def __repr__(self):
        return f"Word{self.parts!r}"


class Redirect:
    """ Target of a redirected standard stream. """
    __slots__ = ("target", "append")

    def __init__(self, target: Word, append=False):
        self.target = target
        self.append = append      # True for >>

    def __eq__(self, other):
        if not isinstance(other, Redirect):
            return NotImplemented
        return (self.target, self.append) == (other.target, other.append)

    def __repr__(self):
        return f"Redirect({self.target!r}, append={self.append})"


class SimpleCommand:
    """ A verb with its parameters and optional stream redirections. """
    def __init__(self, verb: Word, params=None, stdin=None, stdout=None, stderr=None):
        self.verb = verb
        self.params = list(params or [])
        self.stdin = stdin        # Redirect or None; append is ignored
        self.stdout = stdout      # Redirect or None
        self.stderr = stderr      # Redirect or None

    def __repr__(self):
        return (f"SimpleCommand({self.verb!r}, {self.params!r}, stdin={self.stdin!r}, "
                f"stdout={self.stdout!r}, stderr={self.stderr!r})")


class CommandNode:
    """
    One node of the command tree.

    A LEAF node wraps a SimpleCommand and has no children; every other
    operator has exactly two children. Nodes are never modified after
    construction.
    """
    __slots__ = ("op", "command", "left", "right")

    def __init__(self, op: Operator, left=None, right=None, command=None):
        if op is Operator.LEAF:
            if command is None or left is not None or right is not None:
                raise ValueError("a leaf node holds a command and no children")
        elif left is None or right is None or command is not None:
            raise ValueError(f"operator {op.name} needs exactly two children")

        self.op = op
        self.command = command
        self.left = left
        self.right = right

    @classmethod
    def leaf(cls, command: SimpleCommand):
        return cls(Operator.LEAF, command=command)

    @property
    def is_leaf(self) -> bool:
        return self.op is Operator.LEAF

    def __repr__(self):
        if self.is_leaf:
            return f"CommandNode.leaf({self.command!r})"
        return f"CommandNode({self.op.name}, {self.left!r}, {self.right!r})"
