"""
FastAPI Backend for Stats Schema Descriptors

Provides REST API endpoints for:
- Compiling an uploaded binary stats schema
- Browsing the compiled achievements and stats
"""

import os
from pathlib import Path
from typing import Optional, List, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from statsgen import StatCoercionError, compile_schema_async
from statsgen.data.reader import DescriptorReader

app = FastAPI(
    title="Stats Schema API",
    description="API for compiling stats schemas and browsing achievement/stat descriptors",
    version="0.1.0"
)

# Enable CORS for local frontends
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

OUTPUT_DIR = Path(os.environ.get("STATSGEN_OUTPUT_DIR", "steam_settings"))
_reader: Optional[DescriptorReader] = None


def get_reader() -> DescriptorReader:
    """Get or create the DescriptorReader for OUTPUT_DIR."""
    global _reader
    if _reader is None or _reader.directory != OUTPUT_DIR:
        if not OUTPUT_DIR.is_dir():
            raise HTTPException(status_code=404, detail=f"Output directory not found: {OUTPUT_DIR}")
        _reader = DescriptorReader(OUTPUT_DIR)
        print(f"[Backend] Reading descriptors from {OUTPUT_DIR}")
    return _reader


# ============== Pydantic Models ==============

class AchievementModel(BaseModel):
    name: str
    displayName: Optional[Dict[str, str]] = None
    description: Optional[Dict[str, str]] = None
    hidden: int = 0
    icon: Optional[str] = None
    icon_gray: Optional[str] = None
    icongray: Optional[str] = None


class StatModel(BaseModel):
    name: str
    type: Optional[str] = None
    default: str
    global_value: str = Field(alias="global")


class CompileResponse(BaseModel):
    achievements: int
    stats: int
    copy_default_unlocked_img: bool
    copy_default_locked_img: bool
    premature_terminations: int


class DescriptorSummary(BaseModel):
    output_dir: str
    has_achievements: bool
    has_stats: bool
    achievement_count: int
    hidden_count: int
    stat_count: int
    stat_types: Dict[str, int]


# ============== Endpoints ==============

@app.post("/api/compile", response_model=CompileResponse)
async def compile_uploaded_schema(request: Request):
    """Compile the request body (raw schema bytes) into OUTPUT_DIR."""
    global _reader
    schema = await request.body()
    if not schema:
        raise HTTPException(status_code=400, detail="Empty schema body")

    try:
        result = await compile_schema_async(
            schema, OUTPUT_DIR, lambda level, msg: print(f"[Backend] [{level}] {msg}")
        )
    except StatCoercionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    _reader = None
    return CompileResponse(
        achievements=len(result.achievements),
        stats=len(result.stats),
        copy_default_unlocked_img=result.copy_default_unlocked_img,
        copy_default_locked_img=result.copy_default_locked_img,
        premature_terminations=result.decode_stats.premature_terminations,
    )


@app.get("/api/achievements", response_model=List[AchievementModel])
async def get_achievements():
    """Achievements from achievements.json."""
    reader = get_reader()
    return [
        AchievementModel(
            name=a.name,
            displayName=a.display_name,
            description=a.description,
            hidden=a.hidden,
            icon=a.icon,
            icon_gray=a.icon_gray,
            icongray=a.icongray,
        )
        for a in reader.achievements
    ]


@app.get("/api/stats", response_model=List[StatModel])
async def get_stats():
    """Stats from stats.json."""
    reader = get_reader()
    return [
        StatModel(**{"name": s.name, "type": s.type, "default": s.default, "global": s.global_value})
        for s in reader.stats
    ]


@app.get("/api/summary", response_model=DescriptorSummary)
async def get_summary():
    """Counts for the compiled descriptor directory."""
    reader = get_reader()
    stat_types: Dict[str, int] = {}
    for stat in reader.stats:
        key = stat.type or "unknown"
        stat_types[key] = stat_types.get(key, 0) + 1

    return DescriptorSummary(
        output_dir=str(reader.directory),
        has_achievements=reader.has_achievements,
        has_stats=reader.has_stats,
        achievement_count=len(reader.achievements),
        hidden_count=sum(1 for a in reader.achievements if a.is_hidden),
        stat_count=len(reader.stats),
        stat_types=stat_types,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
