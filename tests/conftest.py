"""Shared fixtures for the critter test suite."""

import os
import sys

import pytest

# Add repo root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from critter.canvas import new_canvas
from critter.params import CreatureParams
from critter.silhouette import Bounds
from critter.traits import DepthMetrics, StyleMetrics, TraitVector


SEEDS = ["alpha", "pet-7", "c0ffee"]


class SequenceRng:
    """Replays fixed values (cycling), counting draws like Mulberry32."""

    def __init__(self, *values):
        self.values = values or (0.5,)
        self.draws = 0

    def __call__(self):
        value = self.values[self.draws % len(self.values)]
        self.draws += 1
        return value


@pytest.fixture
def traits():
    return TraitVector.from_mapping({
        "builder": 70, "fixer": 40, "refiner": 20, "scholar": 55,
        "scribe": 10, "architect": 35, "operator": 60, "guardian": 25,
    })


@pytest.fixture
def depth():
    return DepthMetrics(edit_test_loop_count=40, repeat_edit_same_file_count=12,
                        phase_switch_count=6, total_sessions=10)


@pytest.fixture
def style():
    return StyleMetrics(bullet_ratio=0.3, question_ratio=0.1, codeblock_ratio=0.4,
                        avg_message_len=220, message_len_std=90, heading_ratio=0.1)


@pytest.fixture
def head_bounds():
    return Bounds(top=4, bottom=9, left=10, right=21)


@pytest.fixture
def body_bounds():
    return Bounds(top=10, bottom=21, left=8, right=23)


@pytest.fixture
def blank():
    return new_canvas(32, 32)


@pytest.fixture
def limb_params():
    return CreatureParams(arm_length=0.3, leg_length=0.3)
