from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from src.guests.dtos import MAX_CAPACITY, MIN_CAPACITY, NotFoundError, ValidationFailedError
from src.seating.repository.read_models import SeatingReadModel, SqlSeatingReadModel
from src.seating.repository.write_models import SeatingWriteModel, SqlSeatingWriteModel
from src.seating.schemas import TableResponse
from src.seating.urls import TABLE_URL, TABLES_URL

router = APIRouter()


class TableSubmit(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    capacity: int = Field(ge=MIN_CAPACITY, le=MAX_CAPACITY)
    description: str | None = Field(default=None, max_length=200)


class TableListResponse(BaseModel):
    tables: list[TableResponse]
    total: int


def get_seating_read_model() -> SeatingReadModel:
    return SqlSeatingReadModel()


def get_seating_write_model() -> SeatingWriteModel:
    return SqlSeatingWriteModel()


@router.get(TABLES_URL, response_model=TableListResponse)
async def list_tables(
    read_model: SeatingReadModel = Depends(get_seating_read_model),
) -> TableListResponse:
    tables = await read_model.list_tables()
    return TableListResponse(
        tables=[TableResponse.from_dto(table) for table in tables],
        total=len(tables),
    )


@router.post(TABLES_URL, response_model=TableResponse, status_code=201)
async def create_table(
    table_data: TableSubmit,
    write_model: SeatingWriteModel = Depends(get_seating_write_model),
) -> TableResponse:
    try:
        table = await write_model.create_table(
            name=table_data.name,
            capacity=table_data.capacity,
            description=table_data.description,
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return TableResponse.from_dto(table)


@router.get(TABLE_URL, response_model=TableResponse)
async def get_table(
    table_id: UUID,
    read_model: SeatingReadModel = Depends(get_seating_read_model),
) -> TableResponse:
    table = await read_model.get_table(table_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Table not found")
    return TableResponse.from_dto(table)


@router.put(TABLE_URL, response_model=TableResponse)
async def update_table(
    table_id: UUID,
    table_data: TableSubmit,
    write_model: SeatingWriteModel = Depends(get_seating_write_model),
) -> TableResponse:
    """
    Rename or resize a table.
    Lowering the capacity below the current occupancy is allowed; the table is
    then reported as over capacity.
    """
    try:
        table = await write_model.update_table(
            table_id=table_id,
            name=table_data.name,
            capacity=table_data.capacity,
            description=table_data.description,
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TableResponse.from_dto(table)


@router.delete(TABLE_URL, status_code=204)
async def delete_table(
    table_id: UUID,
    write_model: SeatingWriteModel = Depends(get_seating_write_model),
) -> Response:
    """Delete a table. Its guests are kept and become unassigned."""
    try:
        await write_model.delete_table(table_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
