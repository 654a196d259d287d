"""County universe: the 32 counties of Ireland plus one historical alias."""

from __future__ import annotations

from .models import County

_RAW_COUNTIES: dict[str, tuple[float, float, str, str]] = {
    "Antrim": (54.72, -6.21, "Ulster", "Home to the Giant's Causeway, one of Ireland's most famous landmarks!"),
    "Armagh": (54.35, -6.65, "Ulster", "Known as the Orchard County, famous for Bramley apples!"),
    "Carlow": (52.72, -6.84, "Leinster", "Ireland's second-smallest county, but packed with history!"),
    "Cavan": (53.99, -7.36, "Ulster", "The source of the River Shannon, Ireland's longest river!"),
    "Clare": (52.84, -8.98, "Munster", "Home to the Cliffs of Moher and the Burren's lunar landscape!"),
    "Cork": (51.90, -8.47, "Munster", "Ireland's largest county, the Rebel County!"),
    "Donegal": (54.83, -7.95, "Ulster", "Contains Ireland's most northerly point at Malin Head!"),
    "Down": (54.38, -5.88, "Ulster", "Home to the Mourne Mountains that inspired C.S. Lewis's Narnia!"),
    "Dublin": (53.35, -6.26, "Leinster", "Ireland's capital, home to about a third of the country's population!"),
    "Fermanagh": (54.34, -7.64, "Ulster", "A third of Fermanagh is covered by water, the Lakeland County!"),
    "Galway": (53.27, -8.86, "Connacht", "Home to the Aran Islands and the heart of the Gaeltacht!"),
    "Kerry": (52.06, -9.85, "Munster", "Home to Carrauntoohil, Ireland's highest mountain!"),
    "Kildare": (53.16, -6.91, "Leinster", "The home of Irish horse racing; the Curragh is legendary!"),
    "Kilkenny": (52.65, -7.25, "Leinster", "The Marble City, and hurling royalty with 36 All-Ireland titles!"),
    "Laois": (53.03, -7.56, "Leinster", "Home to the Rock of Dunamase, a stunning ruined fortress!"),
    "Leitrim": (54.12, -8.00, "Connacht", "Ireland's least populated county, but beautiful lake country!"),
    "Limerick": (52.66, -8.63, "Munster", "The Treaty City, where the famous Treaty of Limerick was signed!"),
    "Londonderry": (54.99, -7.00, "Ulster", "Derry's city walls are among the best-preserved in Europe!"),
    "Longford": (53.73, -7.80, "Leinster", "Corlea Trackway here is a 2,000-year-old Iron Age road!"),
    "Louth": (53.88, -6.49, "Leinster", "Ireland's smallest county, the Wee County!"),
    "Mayo": (53.76, -9.53, "Connacht", "Home to Croagh Patrick, Ireland's holy mountain!"),
    "Meath": (53.60, -6.66, "Leinster", "Newgrange is older than the Egyptian pyramids!"),
    "Monaghan": (54.25, -6.97, "Ulster", "The drumlin county, rolling hills shaped by ice age glaciers!"),
    "Offaly": (53.23, -7.72, "Leinster", "Clonmacnoise was once one of Europe's great centres of learning!"),
    "Roscommon": (53.76, -8.27, "Connacht", "Home to Rathcroghan, the ancient capital of Connacht!"),
    "Sligo": (54.25, -8.47, "Connacht", "Yeats Country; the poet's beloved Ben Bulben is here!"),
    "Tipperary": (52.47, -7.86, "Munster", "The Rock of Cashel is one of Ireland's most spectacular sites!"),
    "Tyrone": (54.60, -7.31, "Ulster", "Ireland's largest inland county, the O'Neill heartland!"),
    "Waterford": (52.26, -7.11, "Munster", "Ireland's oldest city, founded by Vikings in 914 AD!"),
    "Westmeath": (53.53, -7.34, "Leinster", "The Lake County, home to Lough Ennell and Lough Owel!"),
    "Wexford": (52.47, -6.58, "Leinster", "The Sunny Southeast has the most sunshine hours in Ireland!"),
    "Wicklow": (52.98, -6.37, "Leinster", "The Garden of Ireland, with mountains just south of Dublin!"),
}

# alias -> canonical key used by the adjacency graph
ALIASES: dict[str, str] = {"Derry": "Londonderry"}

COUNTIES: dict[str, County] = {
    name: County(name=name, lat=lat, lng=lng, province=province, fact=fact)
    for name, (lat, lng, province, fact) in _RAW_COUNTIES.items()
}
for _alias, _canonical in ALIASES.items():
    _source = COUNTIES[_canonical]
    COUNTIES[_alias] = County(
        name=_alias, lat=_source.lat, lng=_source.lng, province=_source.province, fact=_source.fact
    )

# Selection order sorts each county under the name players know it by, so the
# Derry entry keeps its slot between Cork and Donegal. Entries stay canonical.
_SORT_NAMES: dict[str, str] = {canonical: alias for alias, canonical in ALIASES.items()}
COUNTY_NAMES: list[str] = sorted(_RAW_COUNTIES, key=lambda name: _SORT_NAMES.get(name, name))

_LOOKUP: dict[str, str] = {name.lower(): name for name in COUNTIES}


def canonical_name(name: str | None) -> str | None:
    """Resolve free text (any case, surrounding whitespace, aliases) to a canonical county name."""
    if not name:
        return None
    key = _LOOKUP.get(" ".join(name.split()).lower())
    if key is None:
        return None
    return ALIASES.get(key, key)


def get_county(name: str | None) -> County | None:
    canonical = canonical_name(name)
    return COUNTIES[canonical] if canonical else None


def all_guessable_names() -> list[str]:
    """Every name a player may type, aliases included."""
    return sorted(COUNTIES)
