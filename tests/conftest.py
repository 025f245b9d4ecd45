"""Shared synthetic MoneyPuck-style skater data."""

import numpy as np
import pandas as pd
import pytest


def make_raw_skaters(n_players: int = 40, seed: int = 7) -> pd.DataFrame:
    """One 'all' and one '5on5' row per player per season, 2013-2024.

    Positions cycle C, L, R, D so a quarter of the players are defensemen.
    """
    rng = np.random.default_rng(seed)
    positions = ["C", "L", "R", "D"]
    rows = []
    for pid in range(n_players):
        position = positions[pid % 4]
        for season in range(2013, 2025):
            gp = int(rng.integers(40, 83))
            shots = int(rng.integers(60, 300))
            goals = int(rng.binomial(shots, 0.11))
            base = {
                "playerId": 8470000 + pid,
                "season": season,
                "name": f"Player {pid}",
                "team": ["TOR", "EDM", "BOS", "COL"][pid % 4],
                "position": position,
                "games_played": gp,
                "icetime": gp * int(rng.integers(700, 1300)),
                "I_F_goals": float(goals),
                "I_F_primaryAssists": float(rng.integers(0, 40)),
                "I_F_secondaryAssists": float(rng.integers(0, 30)),
                "I_F_xGoals": round(goals * 0.9 + float(rng.normal(0, 2)), 2),
                "I_F_shotsOnGoal": float(shots),
                "I_F_highDangerShots": float(rng.integers(5, 60)),
            }
            rows.append({**base, "situation": "all"})
            rows.append({**base, "situation": "5on5", "I_F_goals": float(goals // 2)})
    return pd.DataFrame(rows)


@pytest.fixture
def raw_skaters() -> pd.DataFrame:
    return make_raw_skaters()
