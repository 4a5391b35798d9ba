# routes/students.py
from fastapi import APIRouter, HTTPException, Depends, Body
from typing import List, Optional
import logging

from database import get_db
from errors import GatewayError
from models.student import Student
from services.students import StudentGateway

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/students", tags=["students"])

def get_gateway(db=Depends(get_db)) -> StudentGateway:
    return StudentGateway(db)

def to_http_error(e: GatewayError) -> HTTPException:
    if e.status_code >= 500:
        logger.error(f"{e.kind}: {e.detail}")
    else:
        logger.warning(f"{e.kind}: {e.detail}")
    return HTTPException(status_code=e.status_code, detail=e.to_dict())

@router.get("/", response_model=List[Student])
async def get_students(
    sortBy: Optional[str] = None,
    order: str = "asc",
    gateway: StudentGateway = Depends(get_gateway)
):
    logger.info(f"Fetching students with sortBy={sortBy}, order={order}")
    try:
        return await gateway.list_all(sort_by=sortBy, descending=order.lower() == "desc")
    except GatewayError as e:
        raise to_http_error(e)

@router.get("/{id}", response_model=Student)
async def get_student(id: str, gateway: StudentGateway = Depends(get_gateway)):
    logger.info(f"Fetching student {id}")
    try:
        return await gateway.get(id)
    except GatewayError as e:
        raise to_http_error(e)

@router.post("/", response_model=Student, status_code=201)
async def create_student(payload: dict = Body(...), gateway: StudentGateway = Depends(get_gateway)):
    logger.info("Creating student")
    try:
        return await gateway.create(payload)
    except GatewayError as e:
        raise to_http_error(e)

@router.put("/{id}", response_model=Student)
async def update_student(id: str, payload: dict = Body(...), gateway: StudentGateway = Depends(get_gateway)):
    logger.info(f"Updating student {id} with fields: {sorted(payload)}")
    try:
        return await gateway.update(id, payload)
    except GatewayError as e:
        raise to_http_error(e)

@router.delete("/{id}")
async def delete_student(id: str, gateway: StudentGateway = Depends(get_gateway)):
    logger.info(f"Deleting student {id}")
    try:
        await gateway.delete(id)
    except GatewayError as e:
        raise to_http_error(e)
    return {"message": "Student deleted"}
