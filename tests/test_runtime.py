"""Tests for compute_payment_input_runtime_options."""

import pytest
from unittest.mock import AsyncMock

from payment_input.core.config import RuntimeConfig
from payment_input.core.credentials import InMemoryCredentialStore
from payment_input.core.errors import BadRequestError, DecryptionError, NotFoundError
from payment_input.core.models import AdditionalInformation, PaymentInputOptions
from payment_input.core.runtime import compute_payment_input_runtime_options


async def _compute(options, state, config, store, factory, **kwargs):
    return await compute_payment_input_runtime_options(
        options,
        session_store=None,
        state=state,
        config=config,
        credential_store=store,
        client_factory=factory,
        **kwargs,
    )


class TestPreconditions:
    @pytest.mark.asyncio
    async def test_missing_credentials_id_is_bad_request(self, config, make_state, provider_factory):
        store = AsyncMock()
        with pytest.raises(BadRequestError) as excinfo:
            await _compute(
                PaymentInputOptions(amount="10"), make_state(), config, store, provider_factory
            )
        assert excinfo.value.code == "BAD_REQUEST"
        assert excinfo.value.message == "Missing credentialsId"
        store.get.assert_not_called()
        assert provider_factory.clients == []

    @pytest.mark.asyncio
    async def test_missing_options_is_bad_request(self, config, make_state, credential_store, provider_factory):
        with pytest.raises(BadRequestError):
            await _compute(None, make_state(), config, credential_store, provider_factory)

    @pytest.mark.asyncio
    async def test_unknown_credentials_is_not_found(self, config, make_state, credential_store, provider_factory):
        options = PaymentInputOptions(credentials_id="missing", amount="10")
        with pytest.raises(NotFoundError) as excinfo:
            await _compute(options, make_state(), config, credential_store, provider_factory)
        assert excinfo.value.code == "NOT_FOUND"
        assert excinfo.value.status_code == 404
        assert provider_factory.clients == []

    @pytest.mark.asyncio
    async def test_credentials_are_scoped_to_workspace(self, config, make_state, credential_store, provider_factory):
        options = PaymentInputOptions(credentials_id="c1", amount="10")
        with pytest.raises(NotFoundError):
            await _compute(
                options, make_state(workspace_id="other"), config, credential_store, provider_factory
            )

    @pytest.mark.asyncio
    async def test_decryption_failure_propagates(self, make_state, credential_store, provider_factory):
        wrong = RuntimeConfig(encryption_secret="f" * 32)
        options = PaymentInputOptions(credentials_id="c1", amount="10")
        with pytest.raises(DecryptionError):
            await _compute(options, make_state(), wrong, credential_store, provider_factory)

    @pytest.mark.asyncio
    async def test_non_numeric_amount_is_bad_request(self, config, make_state, credential_store, provider_factory):
        options = PaymentInputOptions(credentials_id="c1", amount="abc", currency="USD")
        with pytest.raises(BadRequestError) as excinfo:
            await _compute(options, make_state(), config, credential_store, provider_factory)
        assert "Could not parse amount" in excinfo.value.message
        assert provider_factory.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", ["1e999999", "9e999998", "1e30"])
    async def test_huge_amount_is_bad_request(
        self, config, make_state, credential_store, provider_factory, price
    ):
        options = PaymentInputOptions(credentials_id="c1", amount="{{Price}}", currency="USD")
        with pytest.raises(BadRequestError) as excinfo:
            await _compute(
                options,
                make_state(variables={"Price": price}),
                config,
                credential_store,
                provider_factory,
            )
        assert "Could not parse amount" in excinfo.value.message
        assert provider_factory.calls == []

    @pytest.mark.asyncio
    async def test_missing_client_secret_is_bad_request(self, config, make_state, credential_store, provider_factory):
        provider_factory.client_secret = None
        options = PaymentInputOptions(credentials_id="c1", amount="10", currency="USD")
        with pytest.raises(BadRequestError) as excinfo:
            await _compute(options, make_state(), config, credential_store, provider_factory)
        assert excinfo.value.message == "Could not create payment intent"

    @pytest.mark.asyncio
    async def test_provider_errors_propagate(self, config, make_state, credential_store):
        client = AsyncMock()
        client.create_payment_intent.side_effect = RuntimeError("card_declined")
        options = PaymentInputOptions(credentials_id="c1", amount="10", currency="USD")
        with pytest.raises(RuntimeError, match="card_declined"):
            await _compute(
                options, make_state(), config, credential_store, lambda key, version: client
            )


class TestKeySelection:
    @pytest.mark.asyncio
    async def test_preview_with_test_key_uses_test_pair(self, config, make_state, credential_store, provider_factory):
        options = PaymentInputOptions(credentials_id="c1", amount="10", currency="USD")
        result = await _compute(options, make_state(), config, credential_store, provider_factory)

        (client,) = provider_factory.clients
        assert client.secret_key == "sk_test_123"
        assert client.api_version == "2024-09-30.acacia"
        assert client.calls == [
            {"amount": 1000, "currency": "USD", "receipt_email": None, "description": None}
        ]
        assert result.public_key == "pk_test_123"
        assert result.payment_intent_secret == "pi_123_secret_456"

    @pytest.mark.asyncio
    async def test_live_session_uses_live_pair(self, config, make_state, credential_store, provider_factory):
        options = PaymentInputOptions(credentials_id="c1", amount="10", currency="USD")
        result = await _compute(
            options, make_state(result_id="r1"), config, credential_store, provider_factory
        )
        assert provider_factory.clients[0].secret_key == "sk_live_123"
        assert result.public_key == "pk_live_123"

    @pytest.mark.asyncio
    async def test_preview_without_test_key_uses_live_pair(self, config, make_state, make_record, provider_factory):
        store = InMemoryCredentialStore(
            [make_record(keys={"live": {"secretKey": "sk_live_9", "publicKey": "pk_live_9"}})]
        )
        options = PaymentInputOptions(credentials_id="c1", amount="10", currency="USD")
        result = await _compute(options, make_state(), config, store, provider_factory)
        assert provider_factory.clients[0].secret_key == "sk_live_9"
        assert result.public_key == "pk_live_9"


class TestAmounts:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "currency, expected_amount, expected_label",
        [
            ("USD", 150000, "$1,500.00"),
            ("JPY", 1500, "¥1,500"),
        ],
    )
    async def test_scaling_and_label(
        self, config, make_state, credential_store, provider_factory, currency, expected_amount, expected_label
    ):
        options = PaymentInputOptions(credentials_id="c1", amount="{{Price}}", currency=currency)
        result = await _compute(
            options,
            make_state(variables={"Price": "1500"}),
            config,
            credential_store,
            provider_factory,
        )
        assert provider_factory.calls[0]["amount"] == expected_amount
        assert result.amount_label == expected_label

    @pytest.mark.asyncio
    async def test_default_currency_applies(self, config, make_state, credential_store, provider_factory):
        options = PaymentInputOptions(credentials_id="c1", amount="2.5")
        result = await _compute(options, make_state(), config, credential_store, provider_factory)
        assert provider_factory.calls[0]["currency"] == "USD"
        assert provider_factory.calls[0]["amount"] == 250
        assert result.amount_label == "$2.50"

    @pytest.mark.asyncio
    async def test_euro_label_uses_french_format(self, config, make_state, credential_store, provider_factory):
        options = PaymentInputOptions(credentials_id="c1", amount="1234.5", currency="EUR")
        result = await _compute(options, make_state(), config, credential_store, provider_factory)
        label = result.amount_label.replace("\u202f", " ").replace("\xa0", " ")
        assert label == "1 234,50 €"


class TestAdditionalInformation:
    @pytest.mark.asyncio
    async def test_email_and_description_are_interpolated(
        self, config, make_state, credential_store, provider_factory
    ):
        options = PaymentInputOptions(
            credentials_id="c1",
            amount="10",
            currency="USD",
            additional_information=AdditionalInformation(
                email="{{Email}}", description="Order for {{Name}}"
            ),
        )
        state = make_state(variables={"Email": "jo@example.com", "Name": "Jo"})
        await _compute(options, state, config, credential_store, provider_factory)
        call = provider_factory.calls[0]
        assert call["receipt_email"] == "jo@example.com"
        assert call["description"] == "Order for Jo"

    @pytest.mark.asyncio
    async def test_empty_email_means_no_receipt(self, config, make_state, credential_store, provider_factory):
        options = PaymentInputOptions(
            credentials_id="c1",
            amount="10",
            currency="USD",
            additional_information=AdditionalInformation(email="{{Email}}"),
        )
        await _compute(options, make_state(), config, credential_store, provider_factory)
        assert provider_factory.calls[0]["receipt_email"] is None

    @pytest.mark.asyncio
    async def test_custom_interpolator_receives_session_store(
        self, config, make_state, credential_store, provider_factory
    ):
        seen = []

        def interpolator(template, *, variables, session_store=None):
            seen.append(session_store)
            return "7" if template == "amount" else ""

        options = PaymentInputOptions(credentials_id="c1", amount="amount", currency="JPY")
        store_marker = object()
        await compute_payment_input_runtime_options(
            options,
            session_store=store_marker,
            state=make_state(),
            config=config,
            credential_store=credential_store,
            client_factory=provider_factory,
            interpolator=interpolator,
        )
        assert provider_factory.calls[0]["amount"] == 7
        assert seen and all(item is store_marker for item in seen)
