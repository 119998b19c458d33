import logging
from contextlib import asynccontextmanager
from typing import List, Optional
from fastapi import FastAPI, HTTPException, Depends, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from lightbnb.config import get_settings
from lightbnb.database import Database, DEFAULT_LIMIT
from lightbnb.exceptions import DataAccessError, InvalidArgumentError
from lightbnb.logging_config import setup_logging
import lightbnb.models_pydantic as schemas

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level)
    database = Database.from_settings(settings)
    app.state.database = database.open()
    try:
        yield
    finally:
        database.close()

app = FastAPI(title="LightBnB", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Dependency to get the database handle opened by the lifespan
def get_db(request: Request) -> Database:
    return request.app.state.database

@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

@app.exception_handler(DataAccessError)
async def data_access_handler(request: Request, exc: DataAccessError):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"{exc.operation} failed"},
    )

# ---------- User Endpoints ----------
@app.post("/users/", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(user: schemas.UserCreate, db: Database = Depends(get_db)):
    if db.get_user_with_email(user.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    return db.add_user(user)

@app.get("/users/", response_model=schemas.UserResponse)
def find_user(email: str = Query(..., min_length=1), db: Database = Depends(get_db)):
    user = db.get_user_with_email(email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@app.get("/users/{user_id}", response_model=schemas.UserResponse)
def get_user(user_id: int, db: Database = Depends(get_db)):
    user = db.get_user_with_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@app.get("/users/{user_id}/reservations", response_model=List[schemas.ReservationRecord])
def list_user_reservations(user_id: int, limit: int = Query(DEFAULT_LIMIT, ge=1),
                           db: Database = Depends(get_db)):
    if not db.get_user_with_id(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return db.get_all_reservations(user_id, limit)

# ---------- Property Endpoints ----------
@app.get("/properties/", response_model=List[schemas.PropertyRecord])
def list_properties(
    city: Optional[str] = None,
    owner_id: Optional[int] = None,
    minimum_price_per_night: Optional[float] = Query(None, ge=0),
    maximum_price_per_night: Optional[float] = Query(None, ge=0),
    minimum_rating: Optional[float] = Query(None, ge=0, le=5),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
    db: Database = Depends(get_db),
):
    filters = schemas.PropertyFilters(
        city=city,
        owner_id=owner_id,
        minimum_price_per_night=minimum_price_per_night,
        maximum_price_per_night=maximum_price_per_night,
        minimum_rating=minimum_rating,
    )
    return db.get_all_properties(filters, limit)

@app.post("/properties/", response_model=schemas.PropertyRecord, status_code=status.HTTP_201_CREATED)
def create_property(property: schemas.PropertyCreate, db: Database = Depends(get_db)):
    record = db.add_property(property)
    logger.info("Added property %s for owner %s", record.id, record.owner_id)
    return record
