import logging
from typing import Iterable

import attrs
import pandas as pd

from .catalog.catalog_utils import ApplianceCatalog, get_default_catalog
from .quote_utils import coerce_number, coerce_quantity, scaled

logger = logging.getLogger(__name__)

BREAKDOWN_COLUMNS = ['item', 'unit_watts', 'quantity', 'total_watts']


def _coerce_watts(value) -> int:
    return int(coerce_number(value, field='watts'))


@attrs.define(frozen=True)
class ApplianceSelection:
    """
    The user's choice for one catalog category.
    `watts` is not an argument: it is always the catalog's wattage for `selected_option`.
    """
    category: str
    selected_option: str
    quantity: int = attrs.field(default=0, converter=coerce_quantity)
    catalog: ApplianceCatalog = attrs.field(factory=get_default_catalog, eq=False, repr=False)
    watts: int = attrs.field(init=False)

    @watts.default
    def _lookup_watts(self) -> int:
        watts = self.catalog.lookup_watts(self.category, self.selected_option)
        if watts == 0 and self.selected_option not in self.catalog.options(self.category):
            logger.debug("Unknown option %r for category %r, counting it as 0 W", self.selected_option, self.category)
        return watts

    @property
    def total_watts(self) -> int:
        return self.watts * self.quantity

    @classmethod
    def select(cls, category: str, option: str, quantity=0,
               catalog: ApplianceCatalog | None = None) -> 'ApplianceSelection':
        catalog = catalog if catalog is not None else get_default_catalog()
        return cls(category=category, selected_option=option, quantity=quantity, catalog=catalog)

    def with_option(self, option: str) -> 'ApplianceSelection':
        return attrs.evolve(self, selected_option=option)

    def with_quantity(self, quantity) -> 'ApplianceSelection':
        return attrs.evolve(self, quantity=quantity)


@attrs.define(frozen=True)
class AdditionalApplianceEntry:
    """A free-form appliance whose unit wattage is typed in by the user."""
    name: str
    watts: int = attrs.field(default=0, converter=_coerce_watts)
    quantity: int = attrs.field(default=0, converter=coerce_quantity)

    @property
    def total_watts(self) -> int:
        return self.watts * self.quantity

    def with_watts(self, watts) -> 'AdditionalApplianceEntry':
        return attrs.evolve(self, watts=watts)

    def with_quantity(self, quantity) -> 'AdditionalApplianceEntry':
        return attrs.evolve(self, quantity=quantity)


@attrs.define(frozen=True)
class LoadSummary:
    total_watts: int = attrs.field(default=0, converter=_coerce_watts)

    @property
    def total_kw(self) -> float:
        return scaled(self.total_watts, divisor=1000, field='total_kw')


def default_selections(catalog: ApplianceCatalog | None = None) -> list[ApplianceSelection]:
    """One placeholder selection per catalog category, as the calculator form starts out."""
    catalog = catalog if catalog is not None else get_default_catalog()
    return [ApplianceSelection.select(category, catalog.placeholder(category), catalog=catalog)
            for category in catalog.categories]


def default_extras(catalog: ApplianceCatalog | None = None) -> list[AdditionalApplianceEntry]:
    catalog = catalog if catalog is not None else get_default_catalog()
    return [AdditionalApplianceEntry(name=name, watts=watts) for name, watts in catalog.additional.items()]


def compute_load_summary(selections: Iterable[ApplianceSelection] = (),
                         extras: Iterable[AdditionalApplianceEntry] = ()) -> LoadSummary:
    """Connected load: the sum of unit watts x quantity over every selection and extra entry."""
    total_watts = sum(s.total_watts for s in selections) + sum(e.total_watts for e in extras)
    return LoadSummary(total_watts=total_watts)


def load_breakdown(selections: Iterable[ApplianceSelection] = (),
                   extras: Iterable[AdditionalApplianceEntry] = ()) -> pd.DataFrame:
    """Table of the entries which contribute load, one row per selection or extra."""
    rows = [(s.selected_option, s.watts, s.quantity, s.total_watts) for s in selections if s.total_watts > 0]
    rows += [(e.name, e.watts, e.quantity, e.total_watts) for e in extras if e.total_watts > 0]
    return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)
