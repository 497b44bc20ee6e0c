import os
from types import MappingProxyType
from typing import Mapping

import attrs
import yaml

CATALOG_FILE = 'appliances.yaml'
CATALOG_ENV_VAR = 'SOLARQUOTE_CATALOG_FILE'


class CatalogError(ValueError):
    """Raised when an appliance catalog file is malformed."""


def _freeze_categories(categories: Mapping[str, Mapping[str, int]]) -> Mapping[str, Mapping[str, int]]:
    return MappingProxyType({name: MappingProxyType(dict(options)) for name, options in categories.items()})


def _freeze_additional(additional: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(additional))


def _validate_wattage(where: str, watts) -> int:
    if isinstance(watts, bool) or not isinstance(watts, int):
        raise CatalogError(f"{where}: wattage must be an integer, got {watts!r}")
    if watts < 0:
        raise CatalogError(f"{where}: wattage must be non-negative, got {watts}")
    return watts


@attrs.define(frozen=True)
class ApplianceCatalog:
    """
    Static appliance reference data for the load calculator.

    `categories` maps a category key (e.g. "fans") to its selectable options and each option's
    unit wattage. Exactly one option per category has a wattage of 0: the "Select ..."
    placeholder shown before the user picks anything.
    `additional` holds the starting wattage of the free-form appliances (microwave, computer, ...).
    """
    categories: Mapping[str, Mapping[str, int]] = attrs.field(converter=_freeze_categories)
    additional: Mapping[str, int] = attrs.field(factory=dict, converter=_freeze_additional)

    def __attrs_post_init__(self):
        for category, options in self.categories.items():
            if not options:
                raise CatalogError(f"Category {category!r} has no options")
            for label, watts in options.items():
                _validate_wattage(f"{category}/{label}", watts)
            placeholders = [label for label, watts in options.items() if watts == 0]
            if len(placeholders) != 1:
                raise CatalogError(f"Category {category!r} must have exactly one 0 W placeholder option, "
                                   f"found {len(placeholders)}")
        for name, watts in self.additional.items():
            _validate_wattage(f"additional/{name}", watts)

    @classmethod
    def from_dict(cls, config: dict) -> 'ApplianceCatalog':
        if not isinstance(config, dict) or not isinstance(config.get('categories'), dict):
            raise CatalogError("Catalog must contain a 'categories' mapping")
        categories = config['categories']
        for category, options in categories.items():
            if not isinstance(options, dict):
                raise CatalogError(f"Category {category!r} must map option labels to wattages")
        additional = config.get('additional') or {}
        if not isinstance(additional, dict):
            raise CatalogError("'additional' must map appliance names to wattages")
        return cls(categories=categories, additional=additional)

    @classmethod
    def from_yaml(cls, catalog_file: str = CATALOG_FILE) -> 'ApplianceCatalog':
        """Load a catalog; relative paths are resolved next to this module."""
        if os.path.isabs(catalog_file):
            yaml_path = catalog_file
        else:
            yaml_path = os.path.join(os.path.dirname(__file__), catalog_file)

        with open(yaml_path, 'r') as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise CatalogError(f"Could not parse catalog {yaml_path}: {e}") from e
        return cls.from_dict(config)

    def placeholder(self, category: str) -> str:
        """Label of the "nothing selected" option of a category."""
        return next(label for label, watts in self.categories[category].items() if watts == 0)

    def options(self, category: str) -> list[str]:
        if not isinstance(category, str):
            return []
        return list(self.categories.get(category, {}))

    def lookup_watts(self, category: str, option: str) -> int:
        """Unit wattage of an option; unknown categories and options resolve to 0 W."""
        if not isinstance(category, str) or not isinstance(option, str):
            return 0
        return self.categories.get(category, {}).get(option, 0)


_default_catalog: ApplianceCatalog | None = None


def get_default_catalog() -> ApplianceCatalog:
    """
    The catalog shipped with the package, loaded once per process.
    Set SOLARQUOTE_CATALOG_FILE to load a different YAML file with the same layout.
    """
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = ApplianceCatalog.from_yaml(os.environ.get(CATALOG_ENV_VAR, CATALOG_FILE))
    return _default_catalog
