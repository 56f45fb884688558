"""Unit tests for the platform persistence delegate."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from billing_processors.models import PersistenceError
from billing_processors.persistence import (
    AccountGroup,
    AuthorizationResult,
    CaptureResult,
    ConnectorPrincipal,
    CreditCard,
    PlatformPersistenceMechanism,
    Transaction,
    TransactionRequest,
    TransactionStatus,
)


@pytest.fixture
def mechanism():
    return PlatformPersistenceMechanism()


@pytest.fixture
def connector():
    """Platform connector double."""
    return MagicMock()


@pytest.fixture
def principal(connector):
    return ConnectorPrincipal(connector, "billing-admin")


@pytest.fixture
def account():
    return MagicMock()


@pytest.fixture
def group(account):
    return AccountGroup(account, "ACME")


@pytest.fixture
def credit_card():
    """A card about to be stored."""
    return CreditCard(
        principal_name="billing-admin",
        group_name="ACME",
        provider_id="stripe-main",
        provider_unique_id="cus_123",
        card_number="4242 4242 4242 4242",
        expiration_month=12,
        expiration_year=2030,
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        country_code="US",
        comments="primary card",
    )


@pytest.fixture
def stored_card(credit_card):
    credit_card.persistence_unique_id = "17"
    return credit_card


@pytest.fixture
def transaction(stored_card):
    return Transaction(
        provider_id="stripe-main",
        credit_card=stored_card,
        request=TransactionRequest(currency="USD", amount=Decimal("10.00"), order_number="SO-1"),
        persistence_unique_id="901",
    )


class TestPrincipalAndGroupChecks:
    """Tests for principal and group validation."""

    def test_none_principal_raises_error(self, mechanism, credit_card):
        with pytest.raises(PersistenceError, match="principal is None"):
            mechanism.store_credit_card(None, credit_card)

    def test_foreign_principal_raises_error(self, mechanism, credit_card):
        """Test that a principal without a connector is rejected."""
        with pytest.raises(PersistenceError, match="not a ConnectorPrincipal"):
            mechanism.store_credit_card(MagicMock(), credit_card)

    def test_foreign_group_raises_error(self, mechanism, principal, transaction):
        """Test that a group not backed by an account is rejected."""
        with pytest.raises(PersistenceError, match="not an AccountGroup"):
            mechanism.insert_transaction(principal, MagicMock(), transaction)

    def test_none_group_raises_error(self, mechanism, principal, transaction):
        with pytest.raises(PersistenceError, match="group is None"):
            mechanism.insert_transaction(principal, None, transaction)


class TestStoreCreditCard:
    """Tests for storing cards."""

    def test_store_returns_pkey_as_string(self, mechanism, principal, connector, credit_card):
        """Test that the card is added to the account and its pkey returned."""
        account = connector.get_account.return_value
        account.add_credit_card.return_value = 17

        pkey = mechanism.store_credit_card(principal, credit_card)

        assert pkey == "17"
        connector.get_account.assert_called_once_with("ACME")
        connector.get_processor.assert_called_once_with("stripe-main")
        connector.get_country_code.assert_called_once_with("US")

        kwargs = account.add_credit_card.call_args.kwargs
        assert kwargs["processor"] is connector.get_processor.return_value
        assert kwargs["country_code"] is connector.get_country_code.return_value
        assert kwargs["card_info"] == "XXXXXXXXXXXX4242"
        assert kwargs["card_number"] == "4242 4242 4242 4242"
        assert kwargs["principal_name"] == "billing-admin"
        assert kwargs["first_name"] == "Ada"
        assert kwargs["description"] == "primary card"

    @pytest.mark.parametrize(
        "lookup,message",
        [
            ("get_account", "Account: ACME"),
            ("get_processor", "Processor: stripe-main"),
            ("get_country_code", "CountryCode: US"),
        ],
    )
    def test_missing_reference_raises_error(
        self, mechanism, principal, connector, credit_card, lookup, message
    ):
        """Test that a missing platform record raises PersistenceError."""
        getattr(connector, lookup).return_value = None

        with pytest.raises(PersistenceError, match=f"Unable to find {message}"):
            mechanism.store_credit_card(principal, credit_card)

    def test_platform_io_error_is_wrapped(self, mechanism, principal, connector, credit_card):
        """Test that OSError from the platform is chained into PersistenceError."""
        io_error = ConnectionResetError("connection reset by peer")
        connector.get_account.side_effect = io_error

        with pytest.raises(PersistenceError) as exc_info:
            mechanism.store_credit_card(principal, credit_card)

        assert exc_info.value.__cause__ is io_error


class TestCardUpdates:
    """Tests for updating and deleting stored cards."""

    def test_update_credit_card(self, mechanism, principal, connector, stored_card):
        mechanism.update_credit_card(principal, stored_card)

        connector.get_credit_card.assert_called_once_with(17)
        stored = connector.get_credit_card.return_value
        kwargs = stored.update.call_args.kwargs
        assert kwargs["country_code"] is connector.get_country_code.return_value
        assert kwargs["last_name"] == "Lovelace"
        assert kwargs["description"] == "primary card"

    def test_update_card_number_stores_masked_number(
        self, mechanism, principal, connector, stored_card
    ):
        """Test that the new number is stored with its mask."""
        mechanism.update_card_number(principal, stored_card, "5555555555554444", 1, 2031)

        connector.get_credit_card.return_value.update_card_number_and_expiration.assert_called_once_with(
            card_info="XXXXXXXXXXXX4444",
            card_number="5555555555554444",
            expiration_month=1,
            expiration_year=2031,
        )

    def test_update_expiration(self, mechanism, principal, connector, stored_card):
        mechanism.update_expiration(principal, stored_card, 6, 2032)

        connector.get_credit_card.return_value.update_card_expiration.assert_called_once_with(
            expiration_month=6,
            expiration_year=2032,
        )

    def test_delete_credit_card(self, mechanism, principal, connector, stored_card):
        mechanism.delete_credit_card(principal, stored_card)

        connector.get_credit_card.return_value.remove.assert_called_once_with()

    @pytest.mark.parametrize("persistence_id", [None, "", "card-17"])
    def test_invalid_persistence_id_raises_error(
        self, mechanism, principal, credit_card, persistence_id
    ):
        """Test that non-numeric persistence ids are rejected."""
        credit_card.persistence_unique_id = persistence_id

        with pytest.raises(PersistenceError, match="Unable to convert persistence id"):
            mechanism.delete_credit_card(principal, credit_card)

    def test_missing_card_raises_error(self, mechanism, principal, connector, stored_card):
        connector.get_credit_card.return_value = None

        with pytest.raises(PersistenceError, match="Unable to find CreditCard: 17"):
            mechanism.update_expiration(principal, stored_card, 6, 2032)


class TestInsertTransaction:
    """Tests for recording new transactions."""

    def test_created_by_from_stored_card(
        self, mechanism, principal, group, account, connector, transaction
    ):
        """Test that the card creator and account come from the stored card."""
        stored = connector.get_credit_card.return_value
        account.add_credit_card_transaction.return_value = 901

        pkey = mechanism.insert_transaction(principal, group, transaction)

        assert pkey == "901"
        connector.get_credit_card.assert_called_once_with(17)
        kwargs = account.add_credit_card_transaction.call_args.kwargs
        assert kwargs["credit_card_created_by"] is stored.created_by
        assert kwargs["credit_card_account"] is stored.account
        assert kwargs["group_name"] == "ACME"
        assert kwargs["request"]["order_number"] == "SO-1"
        assert kwargs["request"]["amount"] == Decimal("10.00")
        assert kwargs["authorization_principal_name"] == "billing-admin"
        assert kwargs["authorization_time"].tzinfo is timezone.utc

    def test_filtered_card_creator_falls_back_to_current_administrator(
        self, mechanism, principal, group, connector, transaction
    ):
        """Test that a creator hidden from this administrator falls back to the current one."""
        connector.get_credit_card.return_value.created_by = None

        mechanism.insert_transaction(principal, group, transaction)

        kwargs = group.account.add_credit_card_transaction.call_args.kwargs
        assert kwargs["credit_card_created_by"] is connector.get_current_administrator.return_value

    def test_unstored_card_uses_current_administrator(
        self, mechanism, principal, group, account, connector, transaction
    ):
        """Test that a card never stored is attributed to the current administrator."""
        transaction.credit_card.persistence_unique_id = None

        mechanism.insert_transaction(principal, group, transaction)

        connector.get_credit_card.assert_not_called()
        kwargs = account.add_credit_card_transaction.call_args.kwargs
        assert kwargs["credit_card_created_by"] is connector.get_current_administrator.return_value
        assert kwargs["credit_card_account"] is account

    def test_missing_processor_raises_error(self, mechanism, principal, group, connector, transaction):
        connector.get_processor.return_value = None

        with pytest.raises(PersistenceError, match="Unable to find Processor: stripe-main"):
            mechanism.insert_transaction(principal, group, transaction)


class TestCompletion:
    """Tests for recording sale and authorize results."""

    @pytest.fixture
    def stored_transaction(self, connector):
        stored = connector.get_transaction.return_value
        stored.status = "PROCESSING"
        return stored

    def test_sale_completed(self, mechanism, principal, connector, transaction, stored_transaction):
        """Test that authorization and capture results are stored."""
        capture_time = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        transaction.status = TransactionStatus.CAPTURED
        transaction.authorization_result = AuthorizationResult(
            communication_result="SUCCESS",
            approval_result="APPROVED",
            approval_code="A1B2C3",
        )
        transaction.capture_result = CaptureResult(
            communication_result="SUCCESS",
            provider_unique_id="ch_123",
        )
        transaction.capture_time = capture_time
        transaction.capture_principal_name = "billing-admin"

        mechanism.sale_completed(principal, transaction)

        connector.get_transaction.assert_called_once_with(901)
        kwargs = stored_transaction.sale_completed.call_args.kwargs
        assert kwargs["status"] == "CAPTURED"
        assert kwargs["authorization"]["approval_code"] == "A1B2C3"
        assert kwargs["capture"]["provider_unique_id"] == "ch_123"
        assert kwargs["capture_time"] == capture_time
        assert kwargs["capture_principal_name"] == "billing-admin"

    def test_authorize_completed(
        self, mechanism, principal, connector, transaction, stored_transaction
    ):
        transaction.status = TransactionStatus.AUTHORIZED
        transaction.authorization_result = AuthorizationResult(approval_result="APPROVED")

        mechanism.authorize_completed(principal, transaction)

        stored_transaction.authorize_completed.assert_called_once()
        kwargs = stored_transaction.authorize_completed.call_args.kwargs
        assert kwargs["status"] == "AUTHORIZED"
        assert kwargs["authorization"]["approval_result"] == "APPROVED"

    @pytest.mark.parametrize("operation", ["sale_completed", "authorize_completed"])
    def test_requires_processing_status(
        self, mechanism, principal, transaction, stored_transaction, operation
    ):
        """Test that completing a non-PROCESSING transaction is rejected."""
        stored_transaction.status = "CAPTURED"

        with pytest.raises(PersistenceError, match="must have status PROCESSING"):
            getattr(mechanism, operation)(principal, transaction)

        stored_transaction.sale_completed.assert_not_called()
        stored_transaction.authorize_completed.assert_not_called()

    def test_status_enum_accepted(self, mechanism, principal, transaction, stored_transaction):
        """Test that a stored status given as an enum is compared by value."""
        stored_transaction.status = TransactionStatus.PROCESSING

        mechanism.authorize_completed(principal, transaction)

        stored_transaction.authorize_completed.assert_called_once()

    def test_missing_transaction_raises_error(self, mechanism, principal, connector, transaction):
        connector.get_transaction.return_value = None

        with pytest.raises(PersistenceError, match="Unable to find Transaction: 901"):
            mechanism.sale_completed(principal, transaction)

    def test_void_completed_not_supported(self, mechanism, principal, transaction):
        """Test that void completion is explicitly unsupported."""
        with pytest.raises(NotImplementedError):
            mechanism.void_completed(principal, transaction)
