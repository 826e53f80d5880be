"""Reference Catalogues — role codes, default lineup formats and scoring schemas.

Invariants:
    - Codes here are the only valid system/league role codes
    - Exactly one position format and one scoring schema are named "Default"
    - Plain data only: the seed routine turns these into rows
"""

SYSTEM_ROLES: list[dict] = [
    {"role_code": "ADMIN", "display": "Administrator",
     "description": "Manages seasons, NFL teams, players and users."},
    {"role_code": "USER", "display": "User",
     "description": "Creates and joins fantasy leagues."},
]

LEAGUE_ROLES: list[dict] = [
    {"role_code": "COMMISSIONER", "display": "Commissioner",
     "description": "Owns the league configuration."},
    {"role_code": "CO_COMMISSIONER", "display": "Co-Commissioner",
     "description": "Helps the commissioner manage the league."},
    {"role_code": "MANAGER", "display": "Manager",
     "description": "Manages a team in the league."},
    {"role_code": "SPECTATOR", "display": "Spectator",
     "description": "Follows the league without a team."},
]

POSITION_FORMATS: list[dict] = [
    {
        "name": "Default",
        "description": "QB, 2 RB, 2 WR, TE, FLEX, K, DEF and 6 bench spots.",
        "slots": [
            ("QB", 1, True), ("RB", 2, True), ("WR", 2, True), ("TE", 1, True),
            ("RB/WR", 1, True), ("K", 1, True), ("DEF", 1, True),
            ("BENCH", 6, False), ("IR", 3, False),
        ],
    },
    {
        "name": "Extremo",
        "description": "Deep lineup with an extra flex and a larger bench.",
        "slots": [
            ("QB", 1, True), ("RB", 3, True), ("WR", 3, True), ("TE", 1, True),
            ("RB/WR", 2, True), ("K", 1, True), ("DEF", 1, True),
            ("BENCH", 8, False), ("IR", 3, False),
        ],
    },
    {
        "name": "Detallado",
        "description": "Standard offense plus individual defensive players.",
        "slots": [
            ("QB", 1, True), ("RB", 2, True), ("WR", 2, True), ("TE", 1, True),
            ("K", 1, True), ("DL", 2, True), ("LB", 2, True), ("DB", 2, True),
            ("BENCH", 6, False), ("IR", 3, False),
        ],
    },
]

# (metric_code, points_per_unit, unit, unit_value, flat_points)
_DEFAULT_RULES: list[tuple] = [
    ("PASS_YDS", 1.0, "YARDS", 25, None),
    ("PASS_TD", None, None, None, 4.0),
    ("PASS_INT", None, None, None, -2.0),
    ("RUSH_YDS", 1.0, "YARDS", 10, None),
    ("RUSH_TD", None, None, None, 6.0),
    ("REC_YDS", 1.0, "YARDS", 10, None),
    ("REC_TD", None, None, None, 6.0),
    ("FUMBLE_LOST", None, None, None, -2.0),
    ("FG_MADE", None, None, None, 3.0),
    ("PAT_MADE", None, None, None, 1.0),
]

SCORING_SCHEMAS: list[dict] = [
    {
        "name": "Default", "version": 1, "is_template": True,
        "description": "Standard scoring (no points per reception).",
        "rules": _DEFAULT_RULES,
    },
    {
        "name": "PPR", "version": 1, "is_template": True,
        "description": "Standard scoring plus one point per reception.",
        "rules": _DEFAULT_RULES + [("RECEPTION", None, None, None, 1.0)],
    },
]
