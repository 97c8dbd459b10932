"""Data objects exchanged with the TrueLayer APIs."""

from .beneficiary import (
    AccountIdentifier,
    Beneficiary,
    ExternalAccount,
    Iban,
    MerchantAccount,
    PaymentSource,
    Remitter,
    SortCodeAccountNumber,
)
from .common import AccessToken, CurrencyCode, ProblemDetails, RequestBody, User
from .mandates import (
    CommercialMandate,
    Constraints,
    CreateMandateRequest,
    CreateMandateResponse,
    Limit,
    ListMandatesResponse,
    MandateAuthorizationRequired,
    MandateAuthorized,
    MandateAuthorizing,
    MandateDefinition,
    MandateDetail,
    MandateFailed,
    MandateRevoked,
    Pagination,
    PeriodicLimits,
    SweepingMandate,
)
from .merchant_accounts import (
    ExternalPayment,
    ListMerchantAccountsResponse,
    ListTransactionsResponse,
    MerchantAccountDetails,
    MerchantAccountPayment,
    Payout,
    Transaction,
)
from .payment_method import (
    BankTransfer,
    Mandate,
    PaymentMethod,
    PreselectedProviderSelection,
    ProviderFilter,
    ProviderSelection,
    UserSelectedProviderSelection,
)
from .payments import (
    Action,
    AuthorizationFlow,
    AuthorizationFlowActions,
    AuthorizationFlowAuthorizing,
    AuthorizationFlowFailed,
    AuthorizationFlowResponse,
    ConsentAction,
    CreatePaymentAuthorizationRequired,
    CreatePaymentAuthorized,
    CreatePaymentFailed,
    CreatePaymentRequest,
    CreatePaymentResponse,
    FormAction,
    FormOptions,
    PaymentAuthorizationRequired,
    PaymentAuthorized,
    PaymentAuthorizing,
    PaymentDetail,
    PaymentExecuted,
    PaymentFailed,
    PaymentSettled,
    PaymentStatus,
    Provider,
    ProviderSelectionAction,
    RedirectAction,
    RedirectOptions,
    StartAuthorizationFlowRequest,
    SubmitConsentRequest,
    SubmitFormRequest,
    SubmitProviderSelectionRequest,
    WaitAction,
)
from .payments_providers import (
    PaymentReturnResource,
    PaymentsProvider,
    ReturnResource,
    SubmitPaymentReturnsRequest,
    SubmitPaymentReturnsResponse,
)

__all__ = [
    "AccessToken",
    "AccountIdentifier",
    "Action",
    "AuthorizationFlow",
    "AuthorizationFlowActions",
    "AuthorizationFlowAuthorizing",
    "AuthorizationFlowFailed",
    "AuthorizationFlowResponse",
    "BankTransfer",
    "Beneficiary",
    "CommercialMandate",
    "ConsentAction",
    "Constraints",
    "CreateMandateRequest",
    "CreateMandateResponse",
    "CreatePaymentAuthorizationRequired",
    "CreatePaymentAuthorized",
    "CreatePaymentFailed",
    "CreatePaymentRequest",
    "CreatePaymentResponse",
    "CurrencyCode",
    "ExternalAccount",
    "ExternalPayment",
    "FormAction",
    "FormOptions",
    "Iban",
    "Limit",
    "ListMandatesResponse",
    "ListMerchantAccountsResponse",
    "ListTransactionsResponse",
    "Mandate",
    "MandateAuthorizationRequired",
    "MandateAuthorized",
    "MandateAuthorizing",
    "MandateDefinition",
    "MandateDetail",
    "MandateFailed",
    "MandateRevoked",
    "MerchantAccount",
    "MerchantAccountDetails",
    "MerchantAccountPayment",
    "Pagination",
    "PaymentAuthorizationRequired",
    "PaymentAuthorized",
    "PaymentAuthorizing",
    "PaymentDetail",
    "PaymentExecuted",
    "PaymentFailed",
    "PaymentMethod",
    "PaymentReturnResource",
    "PaymentSettled",
    "PaymentSource",
    "PaymentStatus",
    "PaymentsProvider",
    "Payout",
    "PeriodicLimits",
    "PreselectedProviderSelection",
    "ProblemDetails",
    "Provider",
    "ProviderFilter",
    "ProviderSelection",
    "ProviderSelectionAction",
    "RedirectAction",
    "RedirectOptions",
    "Remitter",
    "RequestBody",
    "ReturnResource",
    "SortCodeAccountNumber",
    "StartAuthorizationFlowRequest",
    "SubmitConsentRequest",
    "SubmitFormRequest",
    "SubmitPaymentReturnsRequest",
    "SubmitPaymentReturnsResponse",
    "SubmitProviderSelectionRequest",
    "SweepingMandate",
    "Transaction",
    "User",
    "UserSelectedProviderSelection",
    "WaitAction",
]
