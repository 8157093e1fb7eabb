"""Tests for wrapper directory normalization."""

from pathlib import Path
from unittest.mock import patch

import pytest

from create_sweet.scaffold import NormalizeError, normalize_directory
from create_sweet.templates.base import TemplateDescriptor


def test_flattens_wrapper(tmp_path: Path, template: TemplateDescriptor) -> None:
    """target/<id>/{a, b} becomes target/{a, b}."""
    wrapper = tmp_path / template.id
    wrapper.mkdir()
    (wrapper / "a").write_text("A")
    (wrapper / "b").mkdir()
    (wrapper / "b" / "inner.txt").write_text("B")

    outcome = normalize_directory(tmp_path, template)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["a", "b"]
    assert (tmp_path / "a").read_text() == "A"
    assert (tmp_path / "b" / "inner.txt").read_text() == "B"
    assert outcome.moved == ("a", "b")
    assert outcome.overwritten == ()
    assert outcome.changed


def test_flat_tree_is_noop(tmp_path: Path, template: TemplateDescriptor) -> None:
    (tmp_path / "package.json").write_text("{}")
    outcome = normalize_directory(tmp_path, template)
    assert not outcome.changed
    assert [p.name for p in tmp_path.iterdir()] == ["package.json"]


def test_file_named_like_template_is_not_a_wrapper(
    tmp_path: Path, template: TemplateDescriptor
) -> None:
    (tmp_path / template.id).write_text("just a file")
    outcome = normalize_directory(tmp_path, template)
    assert not outcome.changed
    assert (tmp_path / template.id).read_text() == "just a file"


def test_collision_overwrites_and_is_reported(
    tmp_path: Path, template: TemplateDescriptor
) -> None:
    (tmp_path / "README.md").write_text("old")
    wrapper = tmp_path / template.id
    wrapper.mkdir()
    (wrapper / "README.md").write_text("new")

    outcome = normalize_directory(tmp_path, template)

    assert (tmp_path / "README.md").read_text() == "new"
    assert outcome.overwritten == ("README.md",)
    assert not wrapper.exists()


def test_nested_entry_named_like_template(
    tmp_path: Path, template: TemplateDescriptor
) -> None:
    wrapper = tmp_path / template.id
    (wrapper / template.id).mkdir(parents=True)
    (wrapper / template.id / "x.txt").write_text("x")
    (wrapper / "a").write_text("A")

    normalize_directory(tmp_path, template)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["a", template.id]
    assert (tmp_path / template.id / "x.txt").read_text() == "x"


def test_filesystem_error_is_normalize_error(
    tmp_path: Path, template: TemplateDescriptor
) -> None:
    wrapper = tmp_path / template.id
    wrapper.mkdir()
    (wrapper / "a").write_text("A")

    with patch(
        "create_sweet.scaffold.normalizer.shutil.move",
        side_effect=PermissionError("denied"),
    ):
        with pytest.raises(NormalizeError, match="denied"):
            normalize_directory(tmp_path, template)
