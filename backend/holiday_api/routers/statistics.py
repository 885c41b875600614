"""Statistics API routes."""
from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from holiday_api.database import get_db
from holiday_api.schemas.statistics import CountryStatisticsOut, GlobalStatisticsOut
from holiday_api.services import statistics_service

router = APIRouter()


@router.get("/", response_model=GlobalStatisticsOut)
def get_statistics(db: Session = Depends(get_db)):
    return statistics_service.get_global_statistics(db)


@router.get("/date/{date}", response_model=list[CountryStatisticsOut])
def get_statistics_for_date(date: datetime, db: Session = Depends(get_db)):
    """Number of holidaymakers per country on the given date."""
    return statistics_service.count_holidaymakers_by_country(db, date)
