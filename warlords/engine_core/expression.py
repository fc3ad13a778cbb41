"""
Rule Expression Evaluator for pile edge rules.

Rules are short boolean expressions attached to a pile's incoming edge,
e.g. "toPile.cards.length < 5" or "getStatePhase() != 'MainPhase'".
A rule passes only when it evaluates to exactly True.

Supports:
- Literals: integers, floats, 'strings', "strings", true/false/null
- Names bound by the context: card, move, fromPile, toPile, ...
- Property access: toPile.cards.length, getCard(card).attackValue
- Indexing: fromPile.cards[0]
- Calls to bound functions only: getCard(), getStatePile(), len(), ...
- Comparisons: ==, !=, ===, !==, <, >, <=, >=, in
- Boolean operators: and/&&, or/||, not/!
- Arithmetic: +, -, *, /, %

There is no assignment and nothing outside the bound function table can
be called, so evaluating a rule cannot change the snapshot.
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from functools import lru_cache
from typing import Any, Callable, TYPE_CHECKING
import re

from .errors import InvalidOperation
from .queries import get_pile_owner, get_pile_state, get_turn_player

if TYPE_CHECKING:
    from .state import GameState
    from ..game_config.definitions import GameConfig


class RuleSyntaxError(InvalidOperation):
    """A rule string could not be parsed."""

    def __init__(self, message: str, rule: str, position: int):
        self.rule = rule
        self.position = position
        super().__init__(f"{message} at position {position} in rule {rule!r}")


class RuleEvaluationError(InvalidOperation):
    """A parsed rule failed while being evaluated."""


# =============================================================================
# Tokenizer
# =============================================================================

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<number>\d+(?:\.\d+)?)
    | (?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<op>===|!==|==|!=|<=|>=|&&|\|\||[<>!+\-*/%().,\[\]])
    """,
    re.VERBOSE,
)

_ESCAPES = {"n": "\n", "t": "\t"}

KEYWORDS = {"true": True, "false": False, "null": None}


@dataclass(frozen=True)
class Token:
    kind: str  # number, string, name, op, end
    value: Any
    position: int


def tokenize(rule: str) -> list[Token]:
    """Split a rule into tokens, ending with an 'end' token."""
    tokens = []
    position = 0
    while position < len(rule):
        match = _TOKEN_RE.match(rule, position)
        if not match:
            raise RuleSyntaxError(f"Unexpected character {rule[position]!r}", rule, position)
        kind = match.lastgroup
        text = match.group()
        if kind == "number":
            tokens.append(Token(kind, float(text) if "." in text else int(text), position))
        elif kind == "string":
            body = re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), text[1:-1])
            tokens.append(Token(kind, body, position))
        elif kind != "ws":
            tokens.append(Token(kind, text, position))
        position = match.end()
    tokens.append(Token("end", None, len(rule)))
    return tokens


# =============================================================================
# AST
# =============================================================================

@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Name:
    id: str


@dataclass(frozen=True)
class Attribute:
    obj: Any
    attr: str


@dataclass(frozen=True)
class Index:
    obj: Any
    index: Any


@dataclass(frozen=True)
class Call:
    func: str
    args: tuple


@dataclass(frozen=True)
class Unary:
    op: str  # "not" or "-"
    operand: Any


@dataclass(frozen=True)
class Binary:
    op: str  # arithmetic, comparison, "and", "or"
    left: Any
    right: Any


_COMPARISONS = {"==", "!=", "===", "!==", "<", ">", "<=", ">=", "in"}


class _Parser:
    """Recursive-descent parser, lowest precedence first."""

    def __init__(self, rule: str):
        self.rule = rule
        self.tokens = tokenize(rule)
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _at(self, *values: str) -> bool:
        token = self.current
        return token.kind in ("op", "name") and token.value in values

    def _expect(self, value: str) -> Token:
        if not self._at(value):
            raise RuleSyntaxError(f"Expected {value!r}", self.rule, self.current.position)
        return self._advance()

    def parse(self):
        if self.current.kind == "end":
            raise RuleSyntaxError("Empty rule", self.rule, 0)
        node = self._or()
        if self.current.kind != "end":
            raise RuleSyntaxError(
                f"Unexpected token {self.current.value!r}", self.rule, self.current.position
            )
        return node

    def _or(self):
        node = self._and()
        while self._at("or", "||"):
            self._advance()
            node = Binary("or", node, self._and())
        return node

    def _and(self):
        node = self._not()
        while self._at("and", "&&"):
            self._advance()
            node = Binary("and", node, self._not())
        return node

    def _not(self):
        if self._at("not", "!"):
            self._advance()
            return Unary("not", self._not())
        return self._comparison()

    def _comparison(self):
        node = self._additive()
        while self.current.value in _COMPARISONS and self.current.kind in ("op", "name"):
            op = self._advance().value
            node = Binary(op, node, self._additive())
        return node

    def _additive(self):
        node = self._term()
        while self._at("+", "-"):
            op = self._advance().value
            node = Binary(op, node, self._term())
        return node

    def _term(self):
        node = self._unary()
        while self._at("*", "/", "%"):
            op = self._advance().value
            node = Binary(op, node, self._unary())
        return node

    def _unary(self):
        if self._at("-"):
            self._advance()
            return Unary("-", self._unary())
        return self._postfix()

    def _postfix(self):
        node = self._atom()
        while True:
            if self._at("("):
                if not isinstance(node, Name):
                    raise RuleSyntaxError(
                        "Only bound functions can be called", self.rule, self.current.position
                    )
                self._advance()
                node = Call(node.id, self._arguments())
            elif self._at("."):
                self._advance()
                token = self._advance()
                if token.kind != "name":
                    raise RuleSyntaxError("Expected attribute name", self.rule, token.position)
                node = Attribute(node, token.value)
            elif self._at("["):
                self._advance()
                index = self._or()
                self._expect("]")
                node = Index(node, index)
            else:
                return node

    def _arguments(self) -> tuple:
        args = []
        if not self._at(")"):
            args.append(self._or())
            while self._at(","):
                self._advance()
                args.append(self._or())
        self._expect(")")
        return tuple(args)

    def _atom(self):
        token = self._advance()
        if token.kind in ("number", "string"):
            return Literal(token.value)
        if token.kind == "name":
            if token.value in KEYWORDS:
                return Literal(KEYWORDS[token.value])
            return Name(token.value)
        if token.kind == "op" and token.value == "(":
            node = self._or()
            self._expect(")")
            return node
        if token.kind == "end":
            raise RuleSyntaxError("Unexpected end of rule", self.rule, token.position)
        raise RuleSyntaxError(f"Unexpected token {token.value!r}", self.rule, token.position)


@lru_cache(maxsize=512)
def parse_rule(rule: str):
    """Parse a rule string into an AST (cached by text)."""
    return _Parser(rule).parse()


def format_ast(node) -> str:
    """Render an AST as an s-expression, for rule authors."""
    if isinstance(node, Literal):
        return repr(node.value)
    if isinstance(node, Name):
        return node.id
    if isinstance(node, Attribute):
        return f"(. {format_ast(node.obj)} {node.attr})"
    if isinstance(node, Index):
        return f"([] {format_ast(node.obj)} {format_ast(node.index)})"
    if isinstance(node, Call):
        args = " ".join(format_ast(a) for a in node.args)
        return f"(call {node.func}{' ' + args if args else ''})"
    if isinstance(node, Unary):
        return f"({node.op} {format_ast(node.operand)})"
    if isinstance(node, Binary):
        return f"({node.op} {format_ast(node.left)} {format_ast(node.right)})"
    raise TypeError(f"Not a rule node: {node!r}")


# =============================================================================
# Evaluation context
# =============================================================================

def _get_last(sequence):
    if sequence is None or len(sequence) == 0:
        return None
    return sequence[-1]


@dataclass
class RuleContext:
    """
    Context for evaluating rules.

    Provides access to:
    - The current snapshot (through copies only)
    - The static game configuration
    - Variables describing the pending operation
    """
    game_state: GameState
    config: GameConfig
    variables: dict[str, Any] = field(default_factory=dict)

    def get_variable(self, name: str) -> Any:
        if name not in self.variables:
            raise RuleEvaluationError(f"Unknown name {name!r}")
        return self.variables[name]

    def functions(self) -> dict[str, Callable[..., Any]]:
        """The only callables a rule may invoke."""
        state = self.game_state
        return {
            "getCard": self.config.get_card,
            "getPile": self.config.get_pile,
            "getStatePile": lambda pile_id: get_pile_state(state, pile_id).copy(),
            "getStatePhase": lambda: state.phase.value,
            "isPlayer1Turn": lambda: state.player1_turn,
            "hasDrawn": lambda: state.has_drawn,
            "hasEnded": lambda: state.ended,
            "getTurnPlayer": lambda: get_turn_player(state),
            "getPileOwner": lambda pile_id: get_pile_owner(state, pile_id),
            "getLast": _get_last,
            "len": len,
        }

    @classmethod
    def for_move(
        cls,
        game_state: GameState,
        config: GameConfig,
        from_pile: str,
        to_pile: str,
        amount: int,
        card: str,
    ) -> RuleContext:
        """Bindings for a pending Move."""
        move = {"from": from_pile, "to": to_pile, "amount": amount, "card": card}
        return cls(
            game_state=game_state,
            config=config,
            variables={
                "card": card,
                "move": move,
                "fromPile": get_pile_state(game_state, from_pile).copy(),
                "toPile": get_pile_state(game_state, to_pile).copy(),
            },
        )

    @classmethod
    def for_attack(
        cls,
        game_state: GameState,
        config: GameConfig,
        from_pile: str,
        to_pile: str,
        attacking_card: str,
        defending_card: str,
    ) -> RuleContext:
        """Bindings for a pending Attack."""
        attack = {
            "from": from_pile,
            "to": to_pile,
            "attackingCard": attacking_card,
            "defendingCard": defending_card,
        }
        return cls(
            game_state=game_state,
            config=config,
            variables={
                "attackingCard": attacking_card,
                "defendingCard": defending_card,
                "from": from_pile,
                "to": to_pile,
                "attack": attack,
                "move": {"from": from_pile, "to": to_pile},
                "fromPile": get_pile_state(game_state, from_pile).copy(),
                "toPile": get_pile_state(game_state, to_pile).copy(),
            },
        )


# =============================================================================
# Evaluator
# =============================================================================

def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class RuleEvaluator:
    """
    Evaluates rule ASTs against a RuleContext.

    Logical operators always produce booleans. Type errors, missing
    names and lookups that fail raise RuleEvaluationError; NotFound
    from getCard()/getPile() propagates unchanged.
    """

    def evaluate(self, rule: str, context: RuleContext) -> Any:
        node = parse_rule(rule)
        return self._eval(node, context, context.functions())

    def check_rule(self, rule: str, context: RuleContext) -> bool:
        """True only when the rule evaluates to the boolean True."""
        return self.evaluate(rule, context) is True

    def check_rules(self, rules: list[str], context: RuleContext) -> bool:
        """AND over all rules. Every rule is evaluated; any fault raises."""
        results = [self.check_rule(rule, context) for rule in rules]
        return all(results)

    def _eval(self, node, context: RuleContext, functions: dict[str, Callable]) -> Any:
        if isinstance(node, Literal):
            return node.value

        elif isinstance(node, Name):
            return context.get_variable(node.id)

        elif isinstance(node, Attribute):
            obj = self._eval(node.obj, context, functions)
            return self._get_attribute(obj, node.attr)

        elif isinstance(node, Index):
            obj = self._eval(node.obj, context, functions)
            index = self._eval(node.index, context, functions)
            try:
                return obj[index]
            except (IndexError, KeyError, TypeError) as e:
                raise RuleEvaluationError(f"Cannot index {obj!r} with {index!r}") from e

        elif isinstance(node, Call):
            func = functions.get(node.func)
            if func is None:
                raise RuleEvaluationError(f"Unknown function {node.func!r}")
            args = [self._eval(a, context, functions) for a in node.args]
            try:
                return func(*args)
            except TypeError as e:
                raise RuleEvaluationError(f"Bad call to {node.func}: {e}") from e

        elif isinstance(node, Unary):
            value = self._eval(node.operand, context, functions)
            if node.op == "not":
                return not value
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise RuleEvaluationError(f"Cannot negate {value!r}")
            return -value

        elif isinstance(node, Binary):
            if node.op == "and":
                return bool(self._eval(node.left, context, functions)) and bool(
                    self._eval(node.right, context, functions)
                )
            if node.op == "or":
                return bool(self._eval(node.left, context, functions)) or bool(
                    self._eval(node.right, context, functions)
                )
            left = self._eval(node.left, context, functions)
            right = self._eval(node.right, context, functions)
            if node.op in _COMPARISONS:
                return self._compare(left, right, node.op)
            return self._arithmetic(left, right, node.op)

        raise RuleEvaluationError(f"Unknown rule node {node!r}")

    def _get_attribute(self, obj: Any, name: str) -> Any:
        """Read a data attribute, a mapping key, or a sequence's length."""
        if name.startswith("_"):
            raise RuleEvaluationError(f"Private attribute {name!r} is not accessible")

        if isinstance(obj, Mapping):
            if name in obj:
                return obj[name]
            raise RuleEvaluationError(f"No key {name!r}")

        if isinstance(obj, (list, tuple, str)):
            if name in ("length", "count"):
                return len(obj)
            raise RuleEvaluationError(f"Sequences have no attribute {name!r}")

        if obj is not None and is_dataclass(obj):
            names = {f.name for f in fields(obj)}
            for candidate in (name, _snake_case(name)):
                if candidate in names or isinstance(
                    getattr(type(obj), candidate, None), property
                ):
                    return getattr(obj, candidate)

        raise RuleEvaluationError(f"{type(obj).__name__} has no attribute {name!r}")

    def _compare(self, left: Any, right: Any, op: str) -> bool:
        """Perform comparison operation."""
        try:
            if op in ("==", "==="):
                return left == right
            elif op in ("!=", "!=="):
                return left != right
            elif op == "<":
                return left < right
            elif op == ">":
                return left > right
            elif op == "<=":
                return left <= right
            elif op == ">=":
                return left >= right
            elif op == "in":
                return left in right
        except TypeError as e:
            raise RuleEvaluationError(f"Cannot compare {left!r} {op} {right!r}") from e
        raise RuleEvaluationError(f"Unknown comparison {op!r}")

    def _arithmetic(self, left: Any, right: Any, op: str) -> Any:
        try:
            if op == "+":
                return left + right
            elif op == "-":
                return left - right
            elif op == "*":
                return left * right
            elif op == "/":
                return left / right
            elif op == "%":
                return left % right
        except (TypeError, ZeroDivisionError) as e:
            raise RuleEvaluationError(f"Cannot compute {left!r} {op} {right!r}") from e
        raise RuleEvaluationError(f"Unknown operator {op!r}")


# Convenience function
def check_rules(rules: list[str], context: RuleContext) -> bool:
    """
    Check a rule list with AND semantics.

    Args:
        rules: Rule expressions attached to a pile edge
        context: Bindings for the pending operation

    Returns:
        True if every rule evaluated to True
    """
    return RuleEvaluator().check_rules(rules, context)
