"""Test doubles shared across unit tests."""

import threading

from billing_processors.providers import MerchantServicesProvider


class CountingProvider(MerchantServicesProvider):
    """Provider that accepts every shape and counts constructions."""

    SUPPORTED_ARITIES = (5, 4, 3, 2, 1)

    constructions = 0
    _count_lock = threading.Lock()

    def __init__(self, provider_id, *params):
        super().__init__(provider_id)
        self.params = params
        with CountingProvider._count_lock:
            CountingProvider.constructions += 1

    @property
    def can_store_credit_cards(self):
        return False


class IdOnlyProvider(MerchantServicesProvider):
    """Provider whose only constructor takes the provider id."""

    SUPPORTED_ARITIES = (1,)

    def __init__(self, provider_id):
        super().__init__(provider_id)

    @property
    def can_store_credit_cards(self):
        return False


class SequenceRandom:
    """Random source returning a fixed sequence of draws."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.values.pop(0)
