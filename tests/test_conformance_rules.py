"""
Tests for the conformance rules.

Each test writes a small package into tmp_path, scans it and runs one
rule. Nothing from the scanned package is imported.
"""

import textwrap
from pathlib import Path

import pytest

from aiblog.conformance import ScanError, check, default_rules, scan_package
from aiblog.conformance.patterns import PackageMatcher
from aiblog.conformance.rules import (
    ClassPlacementRule,
    EntityCascadeRule,
    EntityMutatorRule,
    EntityRelationshipShapeRule,
    ForbiddenDependencyRule,
    Layer,
    LayeredArchitectureRule,
    ManyToOneLazyRule,
    SliceCycleRule,
)
from aiblog.conformance.policy import CONTROLLER, REPOSITORY, SERVICE
from aiblog.conformance.rules.entities import EntityRule, entity_classes


def write_package(root: Path, files: dict[str, str], name: str = "blog") -> Path:
    """Write ``files`` (relative path -> source) as a package under ``root``."""
    package = root / name
    for relative, source in files.items():
        path = package / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
    for directory in [package, *[p for p in package.rglob("*") if p.is_dir()]]:
        init = directory / "__init__.py"
        if not init.exists():
            init.write_text("", encoding="utf-8")
    return package


ENTITY_HEADER = """
from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog.database import Base
"""


def entity_package(tmp_path: Path, body: str) -> Path:
    return write_package(
        tmp_path,
        {
            "database.py": "class Base:\n    pass\n",
            "domain/post/entity.py": ENTITY_HEADER + textwrap.dedent(body),
        },
    )


class TestPackageMatcher:
    def test_segment_anywhere(self) -> None:
        matcher = PackageMatcher("..service..")
        assert matcher.matches("blog.domain.post.service")
        assert matcher.matches("blog.domain.post.service.helpers")
        assert not matcher.matches("blog.domain.post.services")

    def test_prefix(self) -> None:
        matcher = PackageMatcher("blog.domain..")
        assert matcher.matches("blog.domain")
        assert matcher.matches("blog.domain.post.entity")
        assert not matcher.matches("blog.domainx")

    def test_capture(self) -> None:
        matcher = PackageMatcher("blog.domain.(*)..")
        assert matcher.capture("blog.domain.post.service") == "post"
        assert matcher.capture("blog.domain.ai") == "ai"
        assert matcher.capture("blog.shared.errors") is None

    @pytest.mark.parametrize("identifier", ["", "..", "a..b"])
    def test_invalid_identifier(self, identifier: str) -> None:
        with pytest.raises(ValueError):
            PackageMatcher(identifier)


class TestScanner:
    def test_relative_imports_resolved(self, tmp_path: Path) -> None:
        root = write_package(
            tmp_path,
            {
                "domain/post/service.py": "from .repository import PostRepository\nfrom ..category import entity\n",
                "domain/post/repository.py": "class PostRepository:\n    pass\n",
                "domain/category/entity.py": "",
            },
        )
        codebase = scan_package(root)
        targets = {dep.target for dep in codebase.dependencies() if dep.origin == "blog.domain.post.service"}
        assert targets == {"blog.domain.post.repository", "blog.domain.category.entity"}

    def test_external_imports_ignored(self, tmp_path: Path) -> None:
        root = write_package(tmp_path, {"app.py": "import os\nfrom fastapi import FastAPI\n"})
        assert scan_package(root).dependencies() == []

    def test_syntax_error_raises_scan_error(self, tmp_path: Path) -> None:
        root = write_package(tmp_path, {"broken.py": "def nope(:\n"})
        with pytest.raises(ScanError):
            scan_package(root)

    def test_missing_directory_raises_scan_error(self, tmp_path: Path) -> None:
        with pytest.raises(ScanError):
            scan_package(tmp_path / "missing")


class TestManyToOneLazy:
    """Many-to-one relationships must declare a lazy loading strategy."""

    def _violations(self, tmp_path: Path, relationship: str) -> list:
        root = entity_package(
            tmp_path,
            f"""
            class Post(Base):
                __tablename__ = "posts"
                category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"))
                category: Mapped["Category"] = {relationship}
            """,
        )
        return ManyToOneLazyRule().check(scan_package(root))

    def test_missing_lazy_is_flagged(self, tmp_path: Path) -> None:
        violations = self._violations(tmp_path, "relationship()")
        assert len(violations) == 1
        assert violations[0].symbol == "blog.domain.post.entity.Post.category"
        assert "lazy" in violations[0].message

    def test_lazy_select_passes(self, tmp_path: Path) -> None:
        assert self._violations(tmp_path, 'relationship(lazy="select")') == []

    def test_lazy_joined_is_flagged(self, tmp_path: Path) -> None:
        violations = self._violations(tmp_path, 'relationship(lazy="joined")')
        assert len(violations) == 1
        assert "eager" in violations[0].message

    def test_non_literal_is_flagged(self, tmp_path: Path) -> None:
        assert len(self._violations(tmp_path, "relationship(lazy=STRATEGY)")) == 1


class TestEntityShape:
    def test_one_to_many_is_flagged(self, tmp_path: Path) -> None:
        root = entity_package(
            tmp_path,
            """
            class Category(Base):
                __tablename__ = "categories"
                posts: Mapped[list["Post"]] = relationship(lazy="select")
            """,
        )
        violations = EntityRelationshipShapeRule().check(scan_package(root))
        assert [violation.symbol for violation in violations] == ["blog.domain.post.entity.Category.posts"]
        assert "one-to-many" in violations[0].message

    def test_many_to_many_and_back_populates_are_flagged(self, tmp_path: Path) -> None:
        root = entity_package(
            tmp_path,
            """
            class Post(Base):
                __tablename__ = "posts"
                tags = relationship("Tag", secondary="post_tags", back_populates="posts", lazy="select")
            """,
        )
        messages = [violation.message for violation in EntityRelationshipShapeRule().check(scan_package(root))]
        assert len(messages) == 2
        assert any("many-to-many" in message for message in messages)
        assert any("back_populates" in message for message in messages)

    def test_unidirectional_many_to_one_passes(self, tmp_path: Path) -> None:
        root = entity_package(
            tmp_path,
            """
            class Post(Base):
                __tablename__ = "posts"
                category: Mapped["Category"] = relationship(lazy="select")
            """,
        )
        assert EntityRelationshipShapeRule().check(scan_package(root)) == []

    def test_cascade_is_flagged(self, tmp_path: Path) -> None:
        root = entity_package(
            tmp_path,
            """
            class Post(Base):
                __tablename__ = "posts"
                category_id: Mapped[int] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"))
                category: Mapped["Category"] = relationship(lazy="select", cascade="all")
            """,
        )
        violations = EntityCascadeRule().check(scan_package(root))
        assert sorted(violation.symbol for violation in violations) == [
            "blog.domain.post.entity.Post.category",
            "blog.domain.post.entity.Post.category_id",
        ]

    def test_setters_are_flagged(self, tmp_path: Path) -> None:
        root = entity_package(
            tmp_path,
            """
            class Post(Base):
                __tablename__ = "posts"

                def set_title(self, title):
                    self.title = title

                @property
                def slug(self):
                    return self.title

                @slug.setter
                def slug(self, value):
                    self.title = value

                def publish(self):
                    self.published = True

                def settle(self):
                    pass
            """,
        )
        violations = EntityMutatorRule().check(scan_package(root))
        assert sorted(violation.symbol for violation in violations) == [
            "blog.domain.post.entity.Post.set_title",
            "blog.domain.post.entity.Post.slug",
        ]

    def test_non_entities_are_ignored(self, tmp_path: Path) -> None:
        root = write_package(
            tmp_path,
            {"domain/post/schemas.py": "class PostDraft:\n    def set_title(self, title):\n        pass\n"},
        )
        assert EntityMutatorRule().check(scan_package(root)) == []


class TestSliceCycles:
    """Domain slices must not form cycles."""

    def test_cycle_reported_and_cleared(self, tmp_path: Path) -> None:
        files = {
            "domain/post/service.py": "from blog.domain.category import service as category_service\n",
            "domain/category/service.py": "from blog.domain.post import service as post_service\n",
        }
        rule = SliceCycleRule("blog.domain.(*)..")

        violations = rule.check(scan_package(write_package(tmp_path / "cyclic", files)))
        assert len(violations) == 1
        assert "Cycle between slices: category -> post -> category" in violations[0].message
        assert "blog.domain.category.service -> blog.domain.post.service (line 1)" in violations[0].message

        files["domain/category/service.py"] = ""
        assert rule.check(scan_package(write_package(tmp_path / "acyclic", files))) == []

    def test_three_slice_cycle(self, tmp_path: Path) -> None:
        root = write_package(
            tmp_path,
            {
                "domain/a/x.py": "import blog.domain.b.x\n",
                "domain/b/x.py": "import blog.domain.c.x\n",
                "domain/c/x.py": "import blog.domain.a.x\n",
            },
        )
        violations = SliceCycleRule("blog.domain.(*)..").check(scan_package(root))
        assert len(violations) == 1
        assert violations[0].message.splitlines()[0] == "Cycle between slices: a -> b -> c -> a"

    def test_identifier_needs_capture(self) -> None:
        with pytest.raises(ValueError):
            SliceCycleRule("blog.domain..")


class TestHexagonalBoundary:
    """AI service and port modules must not reach adapters."""

    RULE = ForbiddenDependencyRule("ai-service-adapter", "..ai.service..", "..ai.adapter..")

    def test_service_importing_adapter_is_flagged(self, tmp_path: Path) -> None:
        root = write_package(
            tmp_path,
            {
                "domain/ai/port.py": "class TextGenerationPort:\n    pass\n",
                "domain/ai/adapter/openai.py": "from blog.domain.ai.port import TextGenerationPort\n",
                "domain/ai/service.py": "from blog.domain.ai.adapter.openai import OpenAIAdapter\n",
            },
        )
        violations = self.RULE.check(scan_package(root))
        assert len(violations) == 1
        assert violations[0].symbol == "blog.domain.ai.service"
        assert violations[0].line == 1

    def test_service_importing_port_only_passes(self, tmp_path: Path) -> None:
        root = write_package(
            tmp_path,
            {
                "domain/ai/port.py": "class TextGenerationPort:\n    pass\n",
                "domain/ai/adapter/openai.py": "from blog.domain.ai.port import TextGenerationPort\n",
                "domain/ai/service.py": "from blog.domain.ai.port import TextGenerationPort\n",
            },
        )
        assert self.RULE.check(scan_package(root)) == []


class TestLayersAndPlacement:
    def test_controller_reaching_repository_is_flagged(self, tmp_path: Path) -> None:
        root = write_package(
            tmp_path,
            {
                "domain/post/controller.py": "from blog.domain.post.repository import PostRepository\n",
                "domain/post/repository.py": "class PostRepository:\n    pass\n",
                "domain/post/service.py": "from blog.domain.post.repository import PostRepository\n",
            },
        )
        violations = LayeredArchitectureRule([CONTROLLER, SERVICE, REPOSITORY]).check(scan_package(root))
        assert [violation.symbol for violation in violations] == ["blog.domain.post.controller"]
        assert "only by Service" in violations[0].message

    def test_service_reaching_controller_is_flagged(self, tmp_path: Path) -> None:
        root = write_package(
            tmp_path,
            {
                "domain/post/controller.py": "",
                "domain/post/service.py": "import blog.domain.post.controller\n",
            },
        )
        violations = LayeredArchitectureRule([CONTROLLER, SERVICE, REPOSITORY]).check(scan_package(root))
        assert len(violations) == 1
        assert "by no other layer" in violations[0].message

    def test_unknown_layer_reference_rejected(self) -> None:
        with pytest.raises(ValueError):
            LayeredArchitectureRule([Layer("Service", "..service..", accessible_by=("Web",))])

    def test_misplaced_classes_are_flagged(self, tmp_path: Path) -> None:
        root = write_package(
            tmp_path,
            {
                "domain/post/helpers.py": (
                    "from abc import ABC\n\n"
                    "class PostService:\n    pass\n\n"
                    "class SearchService(ABC):\n    pass\n\n"
                    "class PostRepository:\n    pass\n"
                ),
                "shared/mail.py": "class MailService:\n    pass\n",
            },
        )
        codebase = scan_package(root)
        service = ClassPlacementRule("Service", "blog.domain..", "..service..", include_abstract=False)
        repository = ClassPlacementRule("Repository", "blog.domain..", "..repository..")
        assert [v.symbol for v in service.check(codebase)] == ["blog.domain.post.helpers.PostService"]
        assert [v.symbol for v in repository.check(codebase)] == ["blog.domain.post.helpers.PostRepository"]


class TestReport:
    def test_default_policy_on_clean_package(self, tmp_path: Path) -> None:
        root = write_package(
            tmp_path,
            {
                "domain/post/controller.py": "from blog.domain.post.service import PostService\n",
                "domain/post/service.py": (
                    "from blog.domain.post.repository import PostRepository\n\n"
                    "class PostService:\n    pass\n"
                ),
                "domain/post/repository.py": "class PostRepository:\n    pass\n",
            },
        )
        report = check(scan_package(root), default_rules("blog"))
        assert report.passed
        assert report.format() == f"blog: {len(report.results)} rules passed"

    def test_report_lists_every_violation(self, tmp_path: Path) -> None:
        root = write_package(
            tmp_path,
            {
                "domain/ai/service.py": "import blog.domain.ai.adapter.groq\n",
                "domain/ai/adapter/groq.py": "",
                "domain/post/helpers.py": "class PostRepository:\n    pass\n",
            },
        )
        report = check(scan_package(root), default_rules("blog"))
        assert not report.passed
        assert report.failed_rules == ["repository-placement", "ai-service-adapter"]
        lines = report.format().splitlines()
        assert lines[0] == "blog: 2 violation(s) in 2 rule(s)"
        assert len(lines) == 3
        assert report.result("ai-service-adapter").violations[0].line == 1


class TestEntityInheritance:
    """Subclasses of entities are entities even without a table of their own."""

    BODY = """
    class Post(Base):
        __tablename__ = "posts"
        category: Mapped["Category"] = relationship(lazy="select")

    class DraftPost(Post):
        reviewer: Mapped["User"] = relationship()

    class ScheduledDraft(DraftPost):
        tags: Mapped[list["Tag"]] = relationship(lazy="select")

    class PostForm:
        reviewer = relationship()
    """

    def test_single_table_subclass_is_checked(self, tmp_path: Path) -> None:
        violations = ManyToOneLazyRule().check(scan_package(entity_package(tmp_path, self.BODY)))
        assert [violation.symbol for violation in violations] == [
            "blog.domain.post.entity.DraftPost.reviewer"
        ]

    def test_inheritance_is_followed_transitively(self, tmp_path: Path) -> None:
        violations = EntityRelationshipShapeRule().check(scan_package(entity_package(tmp_path, self.BODY)))
        assert [violation.symbol for violation in violations] == [
            "blog.domain.post.entity.ScheduledDraft.tags"
        ]

    def test_entity_classes_lists_the_hierarchy(self, tmp_path: Path) -> None:
        codebase = scan_package(entity_package(tmp_path, self.BODY))
        assert [cls.name for cls in entity_classes(codebase)] == ["Post", "DraftPost", "ScheduledDraft"]


class TestRuleContracts:
    def test_entity_rule_requires_check_entity(self) -> None:
        with pytest.raises(TypeError):
            EntityRule()

    def test_class_named_exactly_like_suffix_is_placed(self, tmp_path: Path) -> None:
        root = write_package(tmp_path, {"domain/post/helpers.py": "class Service:\n    pass\n"})
        rule = ClassPlacementRule("Service", "blog.domain..", "..service..")
        assert [v.symbol for v in rule.check(scan_package(root))] == ["blog.domain.post.helpers.Service"]
