"""
Static snapshot of a Python package.

Parses every module of a package with ``ast`` and records what the
conformance rules need: internal imports (with line numbers), classes,
their bases, class-level fields and methods. Nothing is imported or
executed. The resulting CodeBase is immutable and shared by all rules.
"""

import ast
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

ABSTRACT_BASES = frozenset({"ABC", "Protocol"})


class ScanError(Exception):
    """Raised when a package cannot be scanned."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)


@dataclass(frozen=True)
class CallInfo:
    """A call expression: ``name(*args, **keywords)``.

    ``name`` is the dotted callee as written (``relationship``,
    ``orm.relationship``); ``short_name`` is its last segment.
    """

    name: str
    args: tuple[ast.expr, ...]
    keywords: tuple[tuple[str, ast.expr], ...]

    @property
    def short_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    def has_keyword(self, name: str) -> bool:
        return any(key == name for key, _ in self.keywords)

    def keyword(self, name: str) -> Optional[ast.expr]:
        for key, value in self.keywords:
            if key == name:
                return value
        return None


@dataclass(frozen=True)
class FieldInfo:
    """A class-level assignment, e.g. ``author: Mapped[User] = relationship()``."""

    name: str
    line: int
    annotation: Optional[ast.expr] = None
    value: Optional[ast.expr] = None

    @property
    def call(self) -> Optional[CallInfo]:
        """The call on the right-hand side, if the value is a call."""
        if isinstance(self.value, ast.Call):
            return call_info(self.value)
        return None

    def nested_calls(self) -> Iterator[CallInfo]:
        """Every call anywhere in the value, outermost first."""
        if self.value is None:
            return
        for node in ast.walk(self.value):
            if isinstance(node, ast.Call):
                yield call_info(node)


@dataclass(frozen=True)
class MethodInfo:
    name: str
    line: int
    decorators: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClassInfo:
    """A class definition at module level."""

    name: str
    module: str
    line: int
    bases: tuple[str, ...] = ()
    fields: tuple[FieldInfo, ...] = ()
    methods: tuple[MethodInfo, ...] = ()
    metaclass: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        return f"{self.module}.{self.name}"

    @property
    def base_names(self) -> frozenset[str]:
        """Last segment of every base, e.g. ``abc.ABC`` -> ``ABC``."""
        return frozenset(base.rsplit(".", 1)[-1].split("[", 1)[0] for base in self.bases)

    @property
    def is_abstract(self) -> bool:
        if self.base_names & ABSTRACT_BASES:
            return True
        if self.metaclass and self.metaclass.rsplit(".", 1)[-1] == "ABCMeta":
            return True
        return any("abstractmethod" in decorator for method in self.methods for decorator in method.decorators)

    def find_field(self, name: str) -> Optional[FieldInfo]:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None


@dataclass(frozen=True)
class ImportRef:
    """An import statement resolved to an absolute dotted name."""

    target: str
    line: int


@dataclass(frozen=True)
class ModuleInfo:
    name: str
    path: Path
    is_package: bool = False
    imports: tuple[ImportRef, ...] = ()
    classes: tuple[ClassInfo, ...] = ()


@dataclass(frozen=True)
class Dependency:
    """``origin`` imports something from ``target``; both are scanned modules."""

    origin: str
    target: str
    line: int

    def describe(self) -> str:
        return f"{self.origin} -> {self.target} (line {self.line})"


@dataclass(frozen=True, eq=False)
class CodeBase:
    """Immutable view over all modules of one root package."""

    package: str
    modules: dict[str, ModuleInfo] = field(default_factory=dict)

    def classes(self) -> Iterator[ClassInfo]:
        for name in sorted(self.modules):
            yield from self.modules[name].classes

    def dependencies(self) -> list[Dependency]:
        """Internal module-to-module dependencies, sorted by origin then line."""
        dependencies = []
        for name in sorted(self.modules):
            seen = set()
            for ref in self.modules[name].imports:
                target = self.resolve(ref.target)
                if target is None or target == name or (target, ref.line) in seen:
                    continue
                seen.add((target, ref.line))
                dependencies.append(Dependency(origin=name, target=target, line=ref.line))
        return dependencies

    def resolve(self, dotted: str) -> Optional[str]:
        """Map an imported dotted name to the longest matching scanned module."""
        candidate = dotted
        while candidate:
            if candidate in self.modules:
                return candidate
            if "." not in candidate:
                return None
            candidate = candidate.rsplit(".", 1)[0]
        return None


def dotted_name(node: ast.expr) -> str:
    """Render ``a.b.c`` / ``a`` / ``a.b[c]`` nodes as dotted text."""
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return f"{dotted_name(node.value)}.{node.attr}"
    if isinstance(node, ast.Call):
        return dotted_name(node.func)
    return ast.unparse(node)


def call_info(node: ast.Call) -> CallInfo:
    return CallInfo(
        name=dotted_name(node.func),
        args=tuple(node.args),
        keywords=tuple((kw.arg, kw.value) for kw in node.keywords if kw.arg is not None),
    )


def _module_name(package: str, root: Path, path: Path) -> tuple[str, bool]:
    relative = path.relative_to(root).with_suffix("")
    parts = list(relative.parts)
    is_package = parts[-1] == "__init__"
    if is_package:
        parts = parts[:-1]
    return ".".join([package, *parts]), is_package


def _resolve_relative(module: str, is_package: bool, level: int, target: Optional[str]) -> str:
    base = module.split(".")
    if not is_package:
        base = base[:-1]
    drop = level - 1
    if drop >= len(base):
        raise ScanError(f"Relative import beyond top-level package in {module}")
    base = base[: len(base) - drop]
    return ".".join(base + ([target] if target else []))


def _collect_imports(tree: ast.Module, module: str, is_package: bool) -> tuple[ImportRef, ...]:
    refs = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            refs.extend(ImportRef(target=alias.name, line=node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                source = _resolve_relative(module, is_package, node.level, node.module)
            else:
                source = node.module or ""
            for alias in node.names:
                if alias.name == "*":
                    refs.append(ImportRef(target=source, line=node.lineno))
                else:
                    refs.append(ImportRef(target=f"{source}.{alias.name}", line=node.lineno))
    return tuple(sorted(refs, key=lambda ref: (ref.line, ref.target)))


def _collect_class(node: ast.ClassDef, module: str) -> ClassInfo:
    fields = []
    methods = []
    for statement in node.body:
        if isinstance(statement, ast.AnnAssign) and isinstance(statement.target, ast.Name):
            fields.append(
                FieldInfo(
                    name=statement.target.id,
                    line=statement.lineno,
                    annotation=statement.annotation,
                    value=statement.value,
                )
            )
        elif isinstance(statement, ast.Assign):
            for target in statement.targets:
                if isinstance(target, ast.Name):
                    fields.append(FieldInfo(name=target.id, line=statement.lineno, value=statement.value))
        elif isinstance(statement, (ast.FunctionDef, ast.AsyncFunctionDef)):
            methods.append(
                MethodInfo(
                    name=statement.name,
                    line=statement.lineno,
                    decorators=tuple(dotted_name(decorator) for decorator in statement.decorator_list),
                )
            )

    metaclass = None
    for keyword in node.keywords:
        if keyword.arg == "metaclass":
            metaclass = dotted_name(keyword.value)

    return ClassInfo(
        name=node.name,
        module=module,
        line=node.lineno,
        bases=tuple(dotted_name(base) for base in node.bases),
        fields=tuple(fields),
        methods=tuple(methods),
        metaclass=metaclass,
    )


def parse_module(path: Path, name: str, is_package: bool = False) -> ModuleInfo:
    """Parse one source file into a ModuleInfo."""
    try:
        source = path.read_text(encoding="utf-8")
        tree = ast.parse(source, filename=str(path))
    except (OSError, UnicodeDecodeError, SyntaxError) as exc:
        raise ScanError(f"Cannot parse {path}: {exc}", path) from exc

    classes = tuple(
        _collect_class(node, name) for node in tree.body if isinstance(node, ast.ClassDef)
    )
    return ModuleInfo(
        name=name,
        path=path,
        is_package=is_package,
        imports=_collect_imports(tree, name, is_package),
        classes=classes,
    )


def scan_package(root: Union[str, Path], package: Optional[str] = None) -> CodeBase:
    """Scan every ``.py`` file below a package directory.

    Args:
        root: Directory of the root package (the one holding ``__init__.py``).
        package: Import name of the root package. Defaults to the directory name.

    Returns:
        A CodeBase keyed by dotted module name.

    Raises:
        ScanError: If the directory is missing or a module cannot be parsed.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise ScanError(f"Package directory not found: {root}", root)
    package = package or root.name

    modules = {}
    for path in sorted(root.rglob("*.py")):
        if "__pycache__" in path.parts:
            continue
        name, is_package = _module_name(package, root, path)
        modules[name] = parse_module(path, name, is_package)

    logger.debug("Scanned %d modules under %s", len(modules), package)
    return CodeBase(package=package, modules=modules)
