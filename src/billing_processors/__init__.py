"""
Payment processor selection for account billing.

Picks one enabled processor configuration for an account by weighted random
draw, and builds (once per unique configuration) the processor handle that
pairs a merchant services provider with the platform persistence delegate.
"""

__version__ = "0.1.0"
