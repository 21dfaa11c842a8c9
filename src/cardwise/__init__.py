"""cardwise: spaced-repetition scheduling and adaptive study-set composition."""

from cardwise.consts import VERSION

__version__ = VERSION
