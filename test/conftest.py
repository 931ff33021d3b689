#!/usr/bin/env python
"""
pytest plugin script.

This script puts the local ``lib/`` directory in front of ``sys.path`` so
that the test suite runs against the checkout, and provides fixtures
shared between test modules.

"""
import os
import sys

import pytest


if not sys.flags.no_user_site:
    # this is needed so that plain "pytest" works against the checkout.
    # We check no_user_site to honor the use of this flag.
    sys.path.insert(
        0,
        os.path.abspath(
            os.path.join(
                os.path.dirname(os.path.abspath(__file__)), "..", "lib"
            )
        ),
    )


@pytest.fixture
def engine():
    from sqlalchemy import create_engine

    eng = create_engine("sqlite://")
    yield eng
    eng.dispose()
