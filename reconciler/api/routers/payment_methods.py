from fastapi import APIRouter, Depends, HTTPException, status

from reconciler.api.dependencies import get_use_cases
from reconciler.api.schemas.payment_methods import AttachPaymentMethodRequest, PaymentMethodResponse
from reconciler.domain.errors import PaymentProcessorError, PaymentProcessorUnavailableError

router = APIRouter()


@router.get(
    "/payment-methods/{payment_method_id}",
    response_model=PaymentMethodResponse,
    status_code=status.HTTP_200_OK,
)
async def get_payment_method(
    payment_method_id: str,
    use_cases=Depends(get_use_cases),
) -> PaymentMethodResponse:
    try:
        details = await use_cases["get_payment_method"].execute(payment_method_id)
    except PaymentProcessorError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except PaymentProcessorUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message
        ) from exc
    return PaymentMethodResponse.from_details(details)


@router.post(
    "/payment-methods",
    response_model=PaymentMethodResponse,
    status_code=status.HTTP_200_OK,
)
async def attach_payment_method(
    payload: AttachPaymentMethodRequest,
    use_cases=Depends(get_use_cases),
) -> PaymentMethodResponse:
    try:
        details = await use_cases["attach_payment_method"].execute(
            payment_method_id=payload.payment_method_id,
            customer_id=payload.customer_id,
            set_as_default=payload.set_as_default,
        )
    except PaymentProcessorError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except PaymentProcessorUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message
        ) from exc
    return PaymentMethodResponse.from_details(details)
