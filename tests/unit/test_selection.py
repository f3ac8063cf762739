"""
Unit tests for the section selection mask.
"""

import pytest

from vadumpcaps.capabilities import Section, Selection


@pytest.mark.unit
class TestSelection:
    """Tests for Selection construction and membership."""

    def test_empty_means_all(self):
        """Test that an empty selection selects every section."""
        selection = Selection()

        assert len(selection) == len(Section)
        assert selection == Selection.all()

    def test_of(self):
        """Test that only the named sections are selected."""
        selection = Selection.of(Section.IMAGE_FORMATS)

        assert Section.IMAGE_FORMATS in selection
        assert Section.PROFILES not in selection

    def test_from_names_accepts_both_spellings(self):
        """Test that dashes and underscores are accepted."""
        assert Selection.from_names(["surface_formats"]) == Selection.from_names(
            ["surface-formats"]
        )

    def test_from_names_rejects_unknown(self):
        """Test that an unknown section name raises ValueError."""
        with pytest.raises(ValueError, match="Unknown section"):
            Selection.from_names(["codecs"])

    def test_names_in_declaration_order(self):
        """Test that names are listed in section order."""
        selection = Selection.of(Section.SUBPICTURE_FORMATS, Section.PROFILES)

        assert selection.names() == ["profiles", "subpicture-formats"]

    def test_immutable(self):
        """Test that a selection cannot be modified."""
        selection = Selection.all()

        with pytest.raises(AttributeError):
            selection._sections = frozenset()

    def test_hashable(self):
        """Test that equal selections hash equally."""
        assert len({Selection.of(Section.FILTERS), Selection.of(Section.FILTERS)}) == 1


@pytest.mark.unit
class TestWithAncestors:
    """Tests for ancestor expansion."""

    def test_filter_caps_brings_its_path(self):
        """Test that a deep section pulls in every parent."""
        selection = Selection.of(Section.FILTER_CAPS).with_ancestors()

        assert selection.names() == [
            "profiles", "entrypoints", "attributes", "filters", "filter-caps",
        ]

    def test_top_level_sections_unchanged(self):
        """Test that top-level sections have no ancestors."""
        selection = Selection.of(Section.IMAGE_FORMATS).with_ancestors()

        assert selection.names() == ["image-formats"]

    def test_all_stays_all(self):
        """Test that expanding every section changes nothing."""
        assert Selection.all().with_ancestors() == Selection.all()
