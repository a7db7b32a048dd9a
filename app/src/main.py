"""FastAPI web app for lottie-frame snapshot rendering."""

import asyncio
import os
from typing import Any

from dotenv import load_dotenv
from fastapi import Body, Depends, FastAPI, HTTPException, Query
from fastapi.responses import Response

from lottie_frame.constants import DEFAULT_FRAME, TIMEOUT_ENV_VAR
from lottie_frame.errors import RenderError
from lottie_frame.output import create_output_provider, media_type_for_output_format
from lottie_frame.playback import PlaybackEngine, RlottieEngine
from lottie_frame.render_pipeline import encode_snapshot

load_dotenv()

app = FastAPI(title="Lottie Frame")


def get_engine() -> PlaybackEngine:
    return RlottieEngine()


def get_timeout() -> float | None:
    raw = os.getenv(TIMEOUT_ENV_VAR)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise HTTPException(
            status_code=500,
            detail=f"{TIMEOUT_ENV_VAR} must be a number of seconds, got '{raw}'",
        )


@app.post("/api/render")
async def render_snapshot(
    animation_data: Any = Body(..., embed=True, description="Lottie scene graph"),
    options: dict[str, Any] | None = Body(None, embed=True, description="Renderer settings"),
    frame: int = Body(DEFAULT_FRAME, embed=True, ge=0, description="Frame index"),
    output_format: str = Query("svg", alias="format", description="Output format: svg or html"),
    engine: PlaybackEngine = Depends(get_engine),
    timeout: float | None = Depends(get_timeout),
):
    """Render a single animation frame and return it as SVG or HTML."""
    try:
        provider = create_output_provider(output_format)
        media_type = media_type_for_output_format(output_format)
        encoded = await encode_snapshot(
            animation_data,
            provider.path,
            frame_number=frame,
            options=options,
            timeout=timeout,
            provider=provider,
            engine=engine,
        )
        return Response(content=encoded, media_type=media_type)
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail="Render timed out")
    except RenderError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to render animation: {e}")
