"""
schema_fixtures.py - Sample stats schemas shared by the test suites
"""

from statsgen.vdf import DecodedValue, binary_dumps


def sample_schema_tree() -> dict:
    """Spacewar-like schema: three scalar stats and one BITS group of two achievements."""
    return {
        "480": {
            "gamename": "Spacewar",
            "version": "12",
            "stats": {
                "1": {
                    "name": "NumGames",
                    "type": DecodedValue.int32(1),
                    "default": "0",
                },
                "2": {
                    "name": "MaxFeet",
                    "type": "2",
                    "default": "1.5",
                },
                "3": {
                    "name": "AverageSpeed",
                    "type": "3",
                },
                "4": {
                    "type": "4",
                    "id": DecodedValue.int32(4),
                    "bits": {
                        "0": {
                            "name": "ACH_WIN_ONE_GAME",
                            "display": {
                                "name": {"english": "Winner", "german": "Gewinner"},
                                "desc": {"english": "Win one game"},
                                "hidden": "0",
                                "icon": "ach1.jpg",
                                "icon_gray": "ach1_gray.jpg",
                            },
                        },
                        "1": {
                            "name": "ACH_TRAVEL",
                            "display": {
                                "name": "Interstellar",
                                "desc": "Travel",
                                "hidden": "1",
                            },
                        },
                    },
                },
            },
        },
    }


def sample_schema_bytes() -> bytes:
    return binary_dumps(sample_schema_tree())


EXPECTED_ACHIEVEMENTS_JSON = """[
  {
    "hidden": 0,
    "displayName": {
      "english": "Winner",
      "german": "Gewinner"
    },
    "description": {
      "english": "Win one game"
    },
    "icon": "img/ach1.jpg",
    "icon_gray": "img/ach1_gray.jpg",
    "name": "ACH_WIN_ONE_GAME"
  },
  {
    "hidden": 1,
    "displayName": {
      "english": "Interstellar"
    },
    "description": {
      "english": "Travel"
    },
    "icon": "img/steam_default_icon_unlocked.jpg",
    "icon_gray": "img/steam_default_icon_locked.jpg",
    "name": "ACH_TRAVEL"
  }
]"""


EXPECTED_STATS_JSON = """[
  {
    "default": "0",
    "global": "0",
    "name": "NumGames",
    "type": "int"
  },
  {
    "default": "1.5",
    "global": "0.0",
    "name": "MaxFeet",
    "type": "float"
  },
  {
    "default": "0.0",
    "global": "0.0",
    "name": "AverageSpeed",
    "type": "avgrate"
  }
]"""


def stat_schema_bytes(**stat_fields) -> bytes:
    """Schema with a single scalar stat built from ``stat_fields``."""
    stat = {"name": "TestStat"}
    stat.update(stat_fields)
    return binary_dumps({"480": {"stats": {"1": stat}}})
