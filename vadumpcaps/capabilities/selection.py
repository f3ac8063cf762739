"""
Output Section Selection

The selection mask decides which branches of the capability traversal run.
A section that is not selected is never queried, not merely hidden.
"""

from enum import Enum
from typing import Iterable


class Section(str, Enum):
    """Named output sections of the capability document."""

    PROFILES = "profiles"
    ENTRYPOINTS = "entrypoints"
    ATTRIBUTES = "attributes"
    SURFACE_FORMATS = "surface-formats"
    FILTERS = "filters"
    FILTER_CAPS = "filter-caps"
    PIPELINE_CAPS = "pipeline-caps"
    IMAGE_FORMATS = "image-formats"
    SUBPICTURE_FORMATS = "subpicture-formats"


# Section -> section whose branch it lives under.
_PARENTS = {
    Section.ENTRYPOINTS: Section.PROFILES,
    Section.ATTRIBUTES: Section.ENTRYPOINTS,
    Section.SURFACE_FORMATS: Section.ATTRIBUTES,
    Section.FILTERS: Section.ATTRIBUTES,
    Section.FILTER_CAPS: Section.FILTERS,
    Section.PIPELINE_CAPS: Section.FILTERS,
}


class Selection:
    """
    Immutable set of selected sections.

    An empty selection given to the constructors means every section.
    """

    __slots__ = ("_sections",)

    def __init__(self, sections: Iterable[Section] = ()):
        chosen = frozenset(Section(section) for section in sections)
        object.__setattr__(self, "_sections", chosen or frozenset(Section))

    def __setattr__(self, name, value):
        raise AttributeError("Selection is read-only")

    @classmethod
    def all(cls) -> "Selection":
        return cls()

    @classmethod
    def of(cls, *sections: Section) -> "Selection":
        return cls(sections)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "Selection":
        """
        Build a selection from section names.

        Both "surface-formats" and "surface_formats" spellings are accepted.

        Raises:
            ValueError: If a name is not a known section.
        """
        sections = []
        for name in names:
            try:
                sections.append(Section(name.replace("_", "-")))
            except ValueError:
                valid = ", ".join(section.value for section in Section)
                raise ValueError(f"Unknown section: {name!r} (valid: {valid})") from None
        return cls(sections)

    def __contains__(self, section: object) -> bool:
        return section in self._sections

    def __iter__(self):
        # Declaration order, for stable output.
        return (section for section in Section if section in self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selection):
            return NotImplemented
        return self._sections == other._sections

    def __hash__(self) -> int:
        return hash(self._sections)

    def __repr__(self) -> str:
        return f"Selection({', '.join(self.names())})"

    def names(self) -> list[str]:
        return [section.value for section in self]

    def with_ancestors(self) -> "Selection":
        """
        Add every section needed to reach the selected ones.

        Selecting attributes alone yields nothing from the traversal, because
        attributes are only visited under a profile and an entry point. This
        returns a selection that includes those parents.
        """
        expanded = set(self._sections)
        for section in self._sections:
            parent = _PARENTS.get(section)
            while parent is not None:
                expanded.add(parent)
                parent = _PARENTS.get(parent)
        return Selection(expanded)
