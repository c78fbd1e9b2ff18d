import sys, os

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from mochi.events.bus import EventBus
from mochi.world import create_world


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def world():
    return create_world(seed=1234)
