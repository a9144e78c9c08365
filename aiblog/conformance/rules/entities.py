"""
Shape rules for persisted entities (SQLAlchemy declarative models).

An entity is a class that declares ``__tablename__``/``__table__``,
directly subclasses one of the configured declarative bases, or inherits
from another entity (single-table inheritance).

Rules:
- entities expose no mutator methods (``set_*`` or property setters);
- relationships are unidirectional many-to-one: no collections
  (``Mapped[list[...]]``, ``uselist=True``), no association tables
  (``secondary=``), no ``back_populates``/``backref``;
- no cascading: no ``cascade=`` on relationships and no
  ``ondelete``/``onupdate="CASCADE"`` on foreign keys;
- many-to-one relationships declare a lazy ``lazy=`` strategy explicitly.
"""

import ast
import re
from abc import abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from aiblog.conformance.codebase import CallInfo, ClassInfo, CodeBase, FieldInfo, dotted_name
from aiblog.conformance.rules.base import Rule, Violation

DEFAULT_ENTITY_BASES = ("Base",)
RELATIONSHIP_FUNCTIONS = frozenset({"relationship", "Relationship"})
FOREIGN_KEY_FUNCTIONS = frozenset({"ForeignKey", "ForeignKeyConstraint"})
COLLECTION_TYPES = frozenset(
    {"list", "List", "set", "Set", "frozenset", "FrozenSet", "dict", "Dict", "Sequence", "Collection"}
)
COLLECTION_MAPPED = frozenset({"WriteOnlyMapped", "DynamicMapped"})
LAZY_STRATEGIES = frozenset({"select", "raise", "raise_on_sql", "noload", True})
EAGER_STRATEGIES = frozenset({"joined", "selectin", "subquery", "immediate", False})

_MUTATOR_NAME = re.compile(r"^set(_\w+|[A-Z]\w*)$")


class RelationshipKind(Enum):
    MANY_TO_ONE = "many-to-one"
    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_MANY = "many-to-many"


@dataclass(frozen=True)
class RelationshipField:
    owner: ClassInfo
    field: FieldInfo
    call: CallInfo
    kind: RelationshipKind

    @property
    def qualified_name(self) -> str:
        return f"{self.owner.qualified_name}.{self.field.name}"


_MISSING = object()


def literal(node: Optional[ast.expr]) -> Any:
    """Evaluate a literal node, or return a sentinel when it is not a literal."""
    if node is None:
        return _MISSING
    try:
        return ast.literal_eval(node)
    except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
        return _MISSING


def is_entity(cls: ClassInfo, entity_bases: tuple[str, ...] = DEFAULT_ENTITY_BASES) -> bool:
    """True when ``cls`` itself is mapped: it names a table or subclasses a declarative base."""
    if cls.find_field("__tablename__") is not None or cls.find_field("__table__") is not None:
        return True
    return bool(cls.base_names & set(entity_bases))


def entity_classes(codebase: CodeBase, entity_bases: tuple[str, ...] = DEFAULT_ENTITY_BASES) -> list[ClassInfo]:
    """Every mapped class, including subclasses of entities with no table of their own.

    Inheritance is followed transitively. Bases are matched by simple
    class name against the classes of the scanned package.
    """
    classes = list(codebase.classes())
    entity_names = {cls.name for cls in classes if is_entity(cls, entity_bases)}
    changed = True
    while changed:
        changed = False
        for cls in classes:
            if cls.name not in entity_names and cls.base_names & entity_names:
                entity_names.add(cls.name)
                changed = True
    return [cls for cls in classes if cls.name in entity_names]


def _unquote(node: ast.expr) -> ast.expr:
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        try:
            return ast.parse(node.value, mode="eval").body
        except SyntaxError:
            return node
    return node


def _is_collection_type(node: ast.expr) -> bool:
    node = _unquote(node)
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return _is_collection_type(node.left) or _is_collection_type(node.right)
    if isinstance(node, ast.Subscript):
        outer = dotted_name(node.value).rsplit(".", 1)[-1]
        if outer in COLLECTION_TYPES:
            return True
        if outer == "Optional":
            return _is_collection_type(node.slice)
    return outer_name(node) in COLLECTION_TYPES


def outer_name(node: ast.expr) -> str:
    if isinstance(node, ast.Subscript):
        node = node.value
    return dotted_name(node).rsplit(".", 1)[-1]


def _annotation_is_collection(annotation: Optional[ast.expr]) -> bool:
    if annotation is None:
        return False
    annotation = _unquote(annotation)
    if not isinstance(annotation, ast.Subscript):
        return False
    wrapper = outer_name(annotation)
    if wrapper in COLLECTION_MAPPED:
        return True
    if wrapper == "Mapped":
        return _is_collection_type(annotation.slice)
    return False


def classify(field: FieldInfo, call: CallInfo) -> RelationshipKind:
    if call.has_keyword("secondary"):
        return RelationshipKind.MANY_TO_MANY
    uselist = literal(call.keyword("uselist"))
    if uselist is True or _annotation_is_collection(field.annotation):
        return RelationshipKind.ONE_TO_MANY
    if uselist is False:
        return RelationshipKind.ONE_TO_ONE
    return RelationshipKind.MANY_TO_ONE


def relationships(cls: ClassInfo) -> list[RelationshipField]:
    found = []
    for field in cls.fields:
        call = field.call
        if call is None or call.short_name not in RELATIONSHIP_FUNCTIONS:
            continue
        found.append(RelationshipField(owner=cls, field=field, call=call, kind=classify(field, call)))
    return found


class EntityRule(Rule):
    """Base for rules applied to every entity class."""

    def __init__(self, entity_bases: tuple[str, ...] = DEFAULT_ENTITY_BASES) -> None:
        self.entity_bases = tuple(entity_bases)

    def entities(self, codebase: CodeBase) -> list[ClassInfo]:
        return entity_classes(codebase, self.entity_bases)

    def check(self, codebase: CodeBase) -> list[Violation]:
        violations = []
        for entity in self.entities(codebase):
            violations.extend(self.check_entity(entity))
        return violations

    @abstractmethod
    def check_entity(self, entity: ClassInfo) -> list[Violation]:
        """Return the violations of one entity class."""
        raise NotImplementedError


class EntityMutatorRule(EntityRule):
    name = "entity-mutators"
    description = "Entities expose no setter methods"

    def check_entity(self, entity: ClassInfo) -> list[Violation]:
        violations = []
        for method in entity.methods:
            symbol = f"{entity.qualified_name}.{method.name}"
            if any(decorator.endswith(".setter") for decorator in method.decorators):
                violations.append(
                    self.violation(symbol, f"{symbol} defines a property setter on an entity", method.line)
                )
            elif _MUTATOR_NAME.match(method.name):
                violations.append(
                    self.violation(symbol, f"{symbol} is a setter method on an entity", method.line)
                )
        return violations


class EntityRelationshipShapeRule(EntityRule):
    name = "entity-relationship-shape"
    description = "Entity relationships are unidirectional many-to-one"

    def check_entity(self, entity: ClassInfo) -> list[Violation]:
        violations = []
        for relation in relationships(entity):
            symbol = relation.qualified_name
            if relation.kind in (RelationshipKind.ONE_TO_MANY, RelationshipKind.MANY_TO_MANY):
                violations.append(
                    self.violation(
                        symbol,
                        f"{symbol} declares a {relation.kind.value} relationship; "
                        "only unidirectional many-to-one is allowed",
                        relation.field.line,
                    )
                )
            for keyword in ("back_populates", "backref"):
                if relation.call.has_keyword(keyword):
                    violations.append(
                        self.violation(
                            symbol,
                            f"{symbol} is bidirectional ({keyword}); relationships must be unidirectional",
                            relation.field.line,
                        )
                    )
        return violations


class EntityCascadeRule(EntityRule):
    name = "entity-cascade"
    description = "Entity relationships declare no cascading"

    def check_entity(self, entity: ClassInfo) -> list[Violation]:
        violations = []
        for relation in relationships(entity):
            if relation.call.has_keyword("cascade"):
                symbol = relation.qualified_name
                violations.append(
                    self.violation(
                        symbol,
                        f"{symbol} declares cascade on {relation.call.short_name}()",
                        relation.field.line,
                    )
                )
        for field in entity.fields:
            symbol = f"{entity.qualified_name}.{field.name}"
            for call in field.nested_calls():
                if call.short_name not in FOREIGN_KEY_FUNCTIONS:
                    continue
                for keyword in ("ondelete", "onupdate"):
                    value = literal(call.keyword(keyword))
                    if isinstance(value, str) and value.strip().upper() == "CASCADE":
                        violations.append(
                            self.violation(
                                symbol,
                                f"{symbol} declares {keyword}=CASCADE on {call.short_name}()",
                                field.line,
                            )
                        )
        return violations


class ManyToOneLazyRule(EntityRule):
    name = "many-to-one-lazy"
    description = "Many-to-one relationships declare lazy loading explicitly"

    def check_entity(self, entity: ClassInfo) -> list[Violation]:
        violations = []
        for relation in relationships(entity):
            if relation.kind is not RelationshipKind.MANY_TO_ONE:
                continue
            symbol = relation.qualified_name
            line = relation.field.line
            node = relation.call.keyword("lazy")
            if node is None:
                violations.append(
                    self.violation(symbol, f"{symbol} does not declare a loading strategy (lazy=...)", line)
                )
                continue
            value = literal(node)
            if value is _MISSING or not isinstance(value, (str, bool)):
                violations.append(
                    self.violation(symbol, f"{symbol} declares a non-literal loading strategy", line)
                )
            elif value in EAGER_STRATEGIES:
                violations.append(
                    self.violation(symbol, f"{symbol} uses eager loading (lazy={value!r})", line)
                )
            elif value not in LAZY_STRATEGIES:
                violations.append(
                    self.violation(symbol, f"{symbol} declares an unknown loading strategy lazy={value!r}", line)
                )
        return violations
