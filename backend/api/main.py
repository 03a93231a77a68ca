"""
FastAPI application for the Grade Rank Calculator API.

Exposes the calculator form actions: define columns, parse pasted
grade data, rank one student and download the table as CSV.
"""

import sys
from pathlib import Path
from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from backend.api.models import (
    RenameColumnRequest, ParseRequest, CalculateRequest,
    ColumnsResponse, ParseResponse, CalculateResponse, ResetResponse
)
from backend.services.grade_session import GradeSession
from processors.columns import get_grade_columns
from processors.errors import ColumnNotFoundError, InvalidSchemaError
from processors.output_generator import format_rank_summary
from utils.config import load_config


config = load_config()

# Initialize FastAPI app
app = FastAPI(
    title="Grade Rank Calculator API",
    description="""
    Paste space separated grade data, define the table columns and find
    out where a student stands among their peers.

    ## Workflow
    1. `POST /api/columns` - Add grade columns, `PATCH /api/columns/{id}` to rename
    2. `POST /api/parse` - Parse pasted data (one student per line)
    3. `POST /api/calculate` - Rank a student by average grade
    4. `GET /api/export` - Download the parsed table as `grade_results.csv`

    ## Ranking
    - Rank 1 is the best average; ties share the better rank
    - Percentile is reported as "top X%" (rank / students * 100)
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=config['api'].get('cors_origins', []),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One calculator form per server process
_session = None

def get_session() -> GradeSession:
    """Get the grade session, initializing lazily on first use."""
    global _session
    if _session is None:
        print("Initializing grade session...")
        _session = GradeSession(config)
        print("✓ Grade session initialized successfully")
    return _session


def _columns_response(columns) -> ColumnsResponse:
    return ColumnsResponse(
        columns=columns,
        grade_column_count=len(get_grade_columns(columns))
    )


# ============= ENDPOINTS =============

@app.get("/", tags=["Health"])
async def root():
    """
    Health check endpoint.

    Returns basic API information and the current session size.
    """
    session = get_session()

    return {
        "status": "online",
        "service": "Grade Rank Calculator API",
        "version": "1.0.0",
        "docs": "/docs",
        "session": {
            "columns": len(session.columns),
            "records": len(session.records)
        },
        "endpoints": {
            "columns": "GET/POST /api/columns",
            "rename_column": "PATCH /api/columns/{column_id}",
            "parse": "POST /api/parse",
            "calculate": "POST /api/calculate",
            "export": "GET /api/export",
            "reset": "POST /api/reset"
        }
    }


@app.get(
    "/api/columns",
    response_model=ColumnsResponse,
    tags=["Columns"],
    summary="Get the table format"
)
async def get_columns():
    return _columns_response(get_session().columns)


@app.post(
    "/api/columns",
    response_model=ColumnsResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Columns"],
    summary="Add a grade column",
    description="Appends one grade column named `Grade N`. Existing columns are never changed."
)
async def create_column():
    columns = get_session().add_column()
    print(f"  ✓ Added column {columns[-1]['id']} ({columns[-1]['name']})")
    return _columns_response(columns)


@app.patch(
    "/api/columns/{column_id}",
    response_model=ColumnsResponse,
    tags=["Columns"],
    summary="Rename a column"
)
async def update_column(column_id: str, request: RenameColumnRequest):
    try:
        columns = get_session().rename_column(column_id, request.name)
    except ColumnNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return _columns_response(columns)


@app.post(
    "/api/parse",
    response_model=ParseResponse,
    tags=["Data"],
    summary="Parse pasted grade data",
    description="""
    Parses space separated text with the current columns. There is no
    header row. Extra values on a line are dropped, missing values are
    left empty. Replaces any previously parsed data.
    """
)
async def parse_data(request: ParseRequest):
    session = get_session()
    records = session.parse(request.raw_text)
    print(f"  ✓ Parsed {len(records)} records")

    return ParseResponse(
        records_count=len(records),
        columns=session.columns,
        records=records
    )


@app.post(
    "/api/calculate",
    response_model=CalculateResponse,
    responses={400: {"description": "No grade columns defined"}},
    tags=["Ranking"],
    summary="Calculate rank and percentile",
    description="""
    Looks up the student by identifier (exact text match) and ranks their
    average grade among all parsed records. Unknown identifiers return
    `found: false` rather than an error.
    """
)
async def calculate_results(request: CalculateRequest):
    session = get_session()

    try:
        result = session.calculate(request.search_id)
    except InvalidSchemaError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    total = len(session.records)

    return CalculateResponse(
        found=bool(result),
        search_id=request.search_id,
        rank=result.get('rank'),
        percentile=result.get('percentile'),
        total_records=total,
        summary=format_rank_summary(result, total)
    )


@app.get(
    "/api/export",
    tags=["Data"],
    summary="Download parsed data as CSV",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}}
)
async def export_csv():
    session = get_session()
    csv_text = session.export_csv()

    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{session.csv_filename}"'}
    )


@app.post(
    "/api/reset",
    response_model=ResetResponse,
    tags=["Session"],
    summary="Reset the calculator"
)
async def reset_session():
    session = get_session()
    session.reset()

    return ResetResponse(
        message="Session reset to default columns",
        columns=session.columns
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
