"""
Generic form submission: validate -> call the gift card API -> branch.

Every page action (create, accept, search) goes through submit_form and
gets back a FormSubmissionResult describing exactly one outcome. The result
is a plain request-scoped value; nothing is kept between requests.
"""

from typing import Any, Awaitable, Callable, Dict, Generic, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

from giftcard_web.core.constants import ErrorMessages, FORM_ERROR_KEY, SubmissionOutcome
from giftcard_web.integrations.gift_card_api import GiftCardAPIReturnMessage

# Logger
from giftcard_web.logging.utils import get_app_logger
logger = get_app_logger("form_submission")

FormT = TypeVar("FormT", bound=BaseModel)
DataT = TypeVar("DataT")


class FormSubmissionResult(BaseModel, Generic[DataT]):
    outcome: SubmissionOutcome
    errors: Dict[str, str] = Field(default_factory=dict)
    values: Dict[str, str] = Field(default_factory=dict)
    data: Optional[DataT] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.outcome == SubmissionOutcome.SUCCESS

    @property
    def form_error(self) -> Optional[str]:
        return self.errors.get(FORM_ERROR_KEY)

    @property
    def http_status(self) -> int:
        """Status code to render a failed submission with"""
        if self.outcome == SubmissionOutcome.SUCCESS:
            return 200
        if self.outcome == SubmissionOutcome.TRANSPORT_ERROR:
            return 500
        return 400

    @property
    def api_http_status(self) -> int:
        """Like http_status, but a server error keeps the API's own status"""
        if self.outcome == SubmissionOutcome.SERVER_ERROR and self.status_code and self.status_code >= 400:
            return self.status_code
        return self.http_status


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """Map a pydantic ValidationError to {input name: first message}"""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or (FORM_ERROR_KEY,)
        errors.setdefault(str(loc[0]), err.get("msg", "Invalid input"))
    return errors


def _preserve_values(raw_data: Mapping[str, Any]) -> Dict[str, str]:
    return {key: value for key, value in raw_data.items() if isinstance(value, str)}


def validate_form(form_model: Type[FormT], raw_data: Mapping[str, Any]) -> Tuple[Optional[FormT], Optional[FormSubmissionResult]]:
    """Validate without submitting; returns (form, None) or (None, failed result)"""
    try:
        return form_model.model_validate(dict(raw_data)), None
    except ValidationError as exc:
        errors = field_errors(exc)
        logger.info(f"form_validation_failed | form={form_model.__name__} fields={sorted(errors)}")
        return None, FormSubmissionResult(
            outcome=SubmissionOutcome.VALIDATION_FAILED,
            errors=errors,
            values=_preserve_values(raw_data),
        )


def result_from_api(api_result: GiftCardAPIReturnMessage, fallback_message: str, values: Optional[Dict[str, str]] = None) -> FormSubmissionResult:
    """Branch on an API outcome: success, server error or transport error"""
    values = values or {}
    if api_result.success:
        return FormSubmissionResult(outcome=SubmissionOutcome.SUCCESS, values=values, data=api_result.data, status_code=api_result.status_code)
    if api_result.is_transport_error:
        return FormSubmissionResult(
            outcome=SubmissionOutcome.TRANSPORT_ERROR,
            errors={FORM_ERROR_KEY: ErrorMessages.UNEXPECTED},
            values=values,
        )
    return FormSubmissionResult(
        outcome=SubmissionOutcome.SERVER_ERROR,
        errors={FORM_ERROR_KEY: api_result.message or fallback_message},
        values=values,
        status_code=api_result.status_code,
    )


async def submit_form(
    form_model: Type[FormT],
    raw_data: Mapping[str, Any],
    send: Callable[[FormT], Awaitable[GiftCardAPIReturnMessage]],
    fallback_message: str,
) -> FormSubmissionResult:
    """
    Validate raw form input and, only if it is valid, send it to the API.

    Args:
        form_model: pydantic form model validating the raw input
        raw_data: submitted form fields
        send: coroutine issuing the API request for a validated form
        fallback_message: form-level message when the API gives none
    Returns:
        FormSubmissionResult with one of the SubmissionOutcome values
    """
    form, failed = validate_form(form_model, raw_data)
    if failed is not None:
        return failed
    api_result = await send(form)
    return result_from_api(api_result, fallback_message, values=_preserve_values(raw_data))
