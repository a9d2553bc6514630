"""Static upgrade table, one entry per upgrade kind."""
from __future__ import annotations

from typing import Dict, List

UPGRADE_DATA: List[Dict[str, object]] = [
    # Infrastructure
    {
        "kind": "tax_efficiency",
        "name": "Tax Efficiency",
        "description": "+15% base income per level",
        "group": "infrastructure",
        "base_cost": 100,
        "cost_per_level": 50,
        "max_level": 5,
    },
    {
        "kind": "economic_recovery",
        "name": "Economic Recovery",
        "description": "+R10 per healthy province per level",
        "group": "infrastructure",
        "base_cost": 150,
        "cost_per_level": 75,
        "max_level": 3,
    },
    {
        "kind": "emergency_funds",
        "name": "Emergency Funds",
        "description": "One-time budget injection",
        "group": "infrastructure",
        "base_cost": 80,
        "cost_per_level": 80,
        "max_level": 3,
        "one_time_bonus": True,
        "bonus_amounts": [200, 300, 500],
    },
    # Cure
    {
        "kind": "research_efficiency",
        "name": "Research Efficiency",
        "description": "+20% global cure speed per level",
        "group": "cure",
        "base_cost": 120,
        "cost_per_level": 60,
        "max_level": 5,
    },
    {
        "kind": "outpost_capacity",
        "name": "Outpost Capacity",
        "description": "+50% local cure rate per level",
        "group": "cure",
        "base_cost": 200,
        "cost_per_level": 100,
        "max_level": 3,
    },
    {
        "kind": "rapid_deployment",
        "name": "Rapid Deployment",
        "description": "-25% outpost cost per level",
        "group": "cure",
        "base_cost": 150,
        "cost_per_level": 75,
        "max_level": 3,
    },
    {
        "kind": "vaccine_breakthrough",
        "name": "Vaccine Breakthrough",
        "description": "-5% cure threshold per level (easier wins)",
        "group": "cure",
        "base_cost": 300,
        "cost_per_level": 150,
        "max_level": 2,
    },
]


__all__ = ["UPGRADE_DATA"]
