"""Service-area geography: counties per state and the main towns per county."""

from __future__ import annotations

from typing import Optional

STATE_NAMES = {
    "MA": "Massachusetts",
    "NH": "New Hampshire",
}

COUNTIES_BY_STATE: dict[str, tuple[str, ...]] = {
    "MA": (
        "Barnstable", "Berkshire", "Bristol", "Dukes", "Essex", "Franklin",
        "Hampden", "Hampshire", "Middlesex", "Nantucket", "Norfolk", "Plymouth",
        "Suffolk", "Worcester",
    ),
    "NH": (
        "Belknap", "Carroll", "Cheshire", "Coos", "Grafton", "Hillsborough",
        "Merrimack", "Rockingham", "Strafford", "Sullivan",
    ),
}

# Sample of the larger towns only; permits elsewhere are reachable through an explicit city filter.
CITIES_BY_COUNTY: dict[str, tuple[str, ...]] = {
    "Middlesex": (
        "Cambridge", "Lowell", "Newton", "Somerville", "Framingham", "Malden",
        "Medford", "Waltham", "Arlington", "Belmont", "Watertown", "Lexington",
        "Burlington", "Woburn", "Melrose", "Stoneham", "Winchester", "Reading",
        "Wilmington",
    ),
    "Worcester": (
        "Worcester", "Fitchburg", "Leominster", "Milford", "Shrewsbury", "Westborough",
        "Marlborough", "Gardner", "Clinton", "Grafton", "Northborough", "Southborough",
        "Hudson", "Holden", "Auburn", "Oxford",
    ),
    "Essex": (
        "Lynn", "Lawrence", "Haverhill", "Peabody", "Salem", "Methuen", "Beverly",
        "Gloucester", "Danvers", "Andover", "North Andover", "Newburyport",
        "Amesbury", "Marblehead", "Saugus", "Swampscott",
    ),
    "Norfolk": (
        "Quincy", "Brookline", "Weymouth", "Braintree", "Franklin", "Needham",
        "Wellesley", "Dedham", "Milton", "Randolph", "Stoughton", "Canton",
        "Norwood", "Westwood", "Sharon", "Walpole",
    ),
    "Plymouth": (
        "Plymouth", "Brockton", "Taunton", "Bridgewater", "Marshfield", "Hanover",
        "Whitman", "Abington", "East Bridgewater", "West Bridgewater", "Rockland",
        "Norwell", "Scituate", "Hingham", "Hull", "Cohasset",
    ),
    "Bristol": (
        "New Bedford", "Fall River", "Attleboro", "Taunton", "Mansfield",
        "North Attleborough", "Dartmouth", "Fairhaven", "Somerset", "Swansea",
        "Seekonk", "Rehoboth", "Dighton", "Berkley", "Freetown", "Westport",
    ),
    "Suffolk": ("Boston", "Revere", "Chelsea", "Winthrop"),
    "Hampden": (
        "Springfield", "Chicopee", "Westfield", "Holyoke", "Agawam",
        "West Springfield", "Ludlow", "East Longmeadow", "Longmeadow",
        "Wilbraham", "Palmer", "Monson", "Hampden", "Southwick",
    ),
    "Hampshire": (
        "Northampton", "Amherst", "Easthampton", "South Hadley", "Hadley",
        "Belchertown", "Granby", "Ware", "Southampton", "Westfield",
    ),
    "Berkshire": (
        "Pittsfield", "North Adams", "Lenox", "Great Barrington", "Adams",
        "Williamstown", "Lee", "Stockbridge", "Sheffield", "West Stockbridge",
    ),
    "Franklin": (
        "Greenfield", "Orange", "Montague", "Shelburne Falls", "Athol",
        "Turners Falls", "Deerfield", "Shelburne", "Buckland", "Charlemont",
    ),
    "Barnstable": (
        "Barnstable", "Hyannis", "Falmouth", "Sandwich", "Dennis", "Yarmouth",
        "Brewster", "Orleans", "Eastham", "Wellfleet", "Truro", "Provincetown",
        "Chatham", "Harwich", "Mashpee", "Bourne",
    ),
    "Dukes": (
        "Vineyard Haven", "Oak Bluffs", "Edgartown", "West Tisbury",
        "Chilmark", "Aquinnah",
    ),
    "Nantucket": ("Nantucket",),
    "Hillsborough": (
        "Manchester", "Nashua", "Merrimack", "Bedford", "Goffstown", "Hudson",
        "Milford", "Amherst", "Hollis", "Litchfield", "Pelham", "Derry",
        "Salem", "Windham", "New Boston", "Mont Vernon",
    ),
    "Rockingham": (
        "Derry", "Salem", "Portsmouth", "Londonderry", "Windham", "Exeter",
        "Hampton", "Seabrook", "Plaistow", "Atkinson", "Sandown", "Danville",
        "Fremont", "Brentwood", "Kingston", "East Kingston",
    ),
    "Merrimack": (
        "Concord", "Franklin", "Hopkinton", "Bow", "Hooksett", "Henniker",
        "Warner", "Contoocook", "Penacook", "Pittsfield", "Epsom", "Chichester",
    ),
    "Strafford": (
        "Dover", "Rochester", "Somersworth", "Durham", "Farmington",
        "Barrington", "Lee", "Madbury", "Rollinsford", "Milton", "New Durham",
    ),
    "Cheshire": (
        "Keene", "Jaffrey", "Peterborough", "Swanzey", "Hinsdale", "Winchester",
        "Troy", "Fitzwilliam", "Rindge", "Dublin", "Marlborough", "Richmond",
    ),
    "Grafton": (
        "Lebanon", "Hanover", "Littleton", "Plymouth", "Bristol", "Claremont",
        "Newport", "Enfield", "Canaan", "Franconia", "Lincoln", "North Haverhill",
    ),
    "Belknap": (
        "Laconia", "Gilford", "Belmont", "Tilton", "Franklin", "Meredith",
        "Alton", "New Hampton", "Sanbornton", "Barnstead",
    ),
    "Carroll": (
        "Conway", "Wolfeboro", "Ossipee", "North Conway", "Jackson", "Bartlett",
        "Madison", "Freedom", "Effingham", "Wakefield", "Brookfield", "Eaton",
    ),
    "Sullivan": (
        "Claremont", "Newport", "Charlestown", "Sunapee", "New London",
        "Grantham", "Springfield", "Goshen", "Lempster", "Washington",
    ),
    "Coos": (
        "Berlin", "Gorham", "Lancaster", "Whitefield", "Littleton", "Bethlehem",
        "Jefferson", "Randolph", "Milan", "Stark", "Northumberland", "Groveton",
    ),
}


def _canonical_county(county: str) -> Optional[str]:
    normalized = county.strip().lower()
    if normalized.endswith(" county"):
        normalized = normalized[: -len(" county")].strip()
    for name in CITIES_BY_COUNTY:
        if name.lower() == normalized:
            return name
    return None


def list_states() -> list[dict]:
    return [
        {"state": code, "name": name, "counties": sorted(COUNTIES_BY_STATE[code])}
        for code, name in STATE_NAMES.items()
    ]


def counties_for_state(state: str) -> Optional[tuple[str, ...]]:
    counties = COUNTIES_BY_STATE.get(state.strip().upper())
    return tuple(sorted(counties)) if counties else None


def cities_for_county(county: str) -> Optional[tuple[str, ...]]:
    """Return the known towns of a county, or None when the county is unknown."""

    name = _canonical_county(county)
    if name is None:
        return None
    return tuple(sorted(CITIES_BY_COUNTY[name]))
