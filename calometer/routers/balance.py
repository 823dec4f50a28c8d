from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from calometer.database import get_db
from calometer.models.user import User
from calometer.schemas.calorie_log import NetCaloricBalanceResponse
from calometer.services.auth_middleware import get_current_user
from calometer.services.net_balance_service import get_net_caloric_balance
from calometer.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/users/net_caloric_balance", tags=["Caloric Balance"], dependencies=[Depends(get_current_user)])


@router.get("/get")
def net_caloric_balance(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        net_balance = get_net_caloric_balance(db, current_user.id)
        return create_response(
            message="Net caloric balance fetched",
            data=NetCaloricBalanceResponse(net_caloric_balance=net_balance).model_dump(),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)
