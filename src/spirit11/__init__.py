"""Spirit11 fantasy cricket: player valuation, rosters and the Spiriter assistant."""

__version__ = "0.1.0"
