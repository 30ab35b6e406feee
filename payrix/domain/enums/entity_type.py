"""Payrix entity kinds.

Each member's value is the API path segment of the entity's endpoint, e.g.
`EntityType.CHARGEBACKS` maps to `/chargebacks`. Casing of path segments is
irregular upstream (camelCase, snake_case and lowercase all occur) and is
reproduced exactly.
"""

from enum import Enum


class EntityType(str, Enum):
    """Upstream entity kinds keyed by endpoint path segment."""

    ACCOUNTS = "accounts"
    ACCOUNT_VERIFICATIONS = "accountVerifications"
    ADJUSTMENTS = "adjustments"
    ALERTS = "alerts"
    ALERT_ACTIONS = "alertActions"
    ALERT_TRIGGERS = "alertTriggers"
    BATCHES = "batches"
    CHARGEBACKS = "chargebacks"
    CHARGEBACK_DOCUMENTS = "chargebackDocuments"
    CHARGEBACK_MESSAGES = "chargebackMessages"
    CHARGEBACK_MESSAGE_RESULTS = "chargebackMessageResults"
    CHARGEBACK_STATUSES = "chargebackStatuses"
    CONTACTS = "contacts"
    CUSTOMERS = "customers"
    DISBURSEMENTS = "disbursements"
    DISBURSEMENT_ENTRIES = "disbursementEntries"
    ENTITIES = "entities"
    ENTITY_RESERVES = "entityReserves"
    ENTRIES = "entries"
    FEES = "fees"
    FEE_RULES = "feeRules"
    FUNDS = "funds"
    LOGINS = "logins"
    MEMBERS = "members"
    MERCHANTS = "merchants"
    NOTES = "notes"
    NOTE_DOCUMENTS = "noteDocuments"
    ORGS = "orgs"
    ORG_ENTITIES = "orgEntities"
    PAYOUTS = "payouts"
    PENDING_ENTRIES = "pendingEntries"
    PLANS = "plans"
    REFUNDS = "refunds"
    RESERVES = "reserves"
    RESERVE_ENTRIES = "reserveEntries"
    SUBSCRIPTIONS = "subscriptions"
    SUBSCRIPTION_TOKENS = "subscriptionTokens"
    TEAM_LOGINS = "team_logins"
    TOKENS = "tokens"
    TXNS = "txns"
    VENDORS = "vendors"

    @property
    def path(self) -> str:
        """Return the endpoint path segment."""
        return self.value
