import datetime
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from cms import dependencies as deps
from cms.exceptions import InvalidRequestError, SubscriberExistsError, SubscriberNotFoundError
from cms.schemas.blog import OperationResult
from cms.schemas.community import SubscribeRequest, SubscribeResult, Subscriber
from cms.services.subscribers_service import SubscribersService

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()


@router.post("/subscribe", response_model=SubscribeResult, status_code=201)
def subscribe(
    body: SubscribeRequest,
    service: SubscribersService = Depends(deps.get_subscribers_service),
):
    """Newsletter sign-up."""
    try:
        return service.subscribe(body)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SubscriberExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error subscribing: {e}")
        raise HTTPException(status_code=500, detail="Failed to subscribe")


@admin_router.get("/subscribers", response_model=List[Subscriber])
def list_subscribers(
    service: SubscribersService = Depends(deps.get_subscribers_service),
):
    try:
        return service.list_subscribers()
    except Exception as e:
        logger.error(f"Error fetching subscribers: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch subscribers")


@admin_router.get("/subscribers/export")
def export_subscribers(
    service: SubscribersService = Depends(deps.get_subscribers_service),
):
    try:
        csv_text = service.export_csv()
    except Exception as e:
        logger.error(f"Error exporting subscribers: {e}")
        raise HTTPException(status_code=500, detail="Failed to export subscribers")

    filename = f"subscribers-{datetime.date.today().isoformat()}.csv"
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@admin_router.delete("/subscribers/{subscriber_id}", response_model=OperationResult)
def delete_subscriber(
    subscriber_id: str,
    service: SubscribersService = Depends(deps.get_subscribers_service),
):
    try:
        service.delete(subscriber_id)
        return OperationResult()
    except SubscriberNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting subscriber {subscriber_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete subscriber")
