"""Account endpoints for the signed-in identity."""

from fastapi import APIRouter, Request, Response, status

from src.app.api.dependencies import AccountServiceDep, CurrentAccount, CurrentIdentity
from src.app.core.rate_limit import limit_registration
from src.app.schemas.account import AccountMeResponse, AccountRead, AccountUpsertRequest

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "/upsert-on-login",
    response_model=AccountRead,
    responses={
        200: {"description": "Existing account updated"},
        201: {"description": "Account created on first confirmed login"},
        401: {"description": "Not authenticated"},
        403: {"description": "Subject does not match the authenticated identity"},
    },
)
@limit_registration
async def upsert_on_login(
    request: Request,
    response: Response,
    data: AccountUpsertRequest,
    identity: CurrentIdentity,
    account_service: AccountServiceDep,
) -> AccountRead:
    """Create the caller's account on first login, or record the login."""
    account, created = await account_service.upsert_on_login(identity.subject, data)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return AccountRead.model_validate(account)


@router.get(
    "/me",
    response_model=AccountMeResponse,
    responses={
        200: {
            "description": "Current account with derived capabilities",
            "content": {
                "application/json": {
                    "example": {
                        "id": "01927f6c-3a8e-7d4b-9c2a-5e8f1b2c3d4e",
                        "email": "brother@example.com",
                        "persona": "GUEST",
                        "onboarding_status": "ONBOARDING_FINISHED",
                        "member_id": "01927f6c-2222-7d4b-9c2a-5e8f1b2c3d4e",
                        "name": "Jordan Smith",
                        "is_fraternity_member": True,
                        "is_seller": False,
                        "is_promoter": False,
                        "is_steward": False,
                    }
                }
            },
        },
        401: {"description": "Not authenticated"},
        403: {"description": "USER_NOT_REGISTERED"},
    },
)
async def get_me(account: CurrentAccount, account_service: AccountServiceDep) -> AccountMeResponse:
    """Get the current account."""
    return await account_service.describe(account)
