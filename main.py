"""FastAPI search-grounded streaming answer application."""

import logging
import secrets
from contextlib import aclosing, asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from fastapi.security import APIKeyHeader
from starlette.types import Send

from config import Settings
from models import QueryRequest
from responder import Generator, Responder, SearchClient

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


class ClosingStreamingResponse(StreamingResponse):
    """StreamingResponse that always closes its body iterator.

    Starlette drops the iterator when the client goes away mid-body; closing
    it here runs the responder's cleanup and shuts the model stream.
    """

    async def stream_response(self, send: Send) -> None:
        await send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": self.raw_headers,
            }
        )
        async with aclosing(self.body_iterator) as body:
            async for chunk in body:
                if not isinstance(chunk, (bytes, memoryview)):
                    chunk = chunk.encode(self.charset)
                await send({"type": "http.response.body", "body": chunk, "more_body": True})
        await send({"type": "http.response.body", "body": b"", "more_body": False})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application.  Settings default to the environment."""
    settings = settings or Settings.from_env()

    # -----------------------------------------------------------------------
    # Optional X-API-Key guard, active only when RESPONDER_API_KEY is set
    # -----------------------------------------------------------------------
    async def require_api_key(api_key: str | None = Security(api_key_header)) -> None:
        expected = settings.responder_api_key
        if expected and not secrets.compare_digest(api_key or "", expected):
            raise HTTPException(status_code=401, detail="Invalid or missing API key")

    # -----------------------------------------------------------------------
    # Lifespan: build clients once
    # -----------------------------------------------------------------------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Using chat model: %s", settings.chat_model)
        searcher = SearchClient(
            api_key=settings.serper_api_key,
            url=settings.serper_url,
            result_count=settings.search_result_count,
            timeout=settings.search_timeout,
        )
        generator = Generator(
            model=settings.chat_model,
            api_key=settings.api_key,
            base_url=settings.base_url,
        )
        app.state.responder = Responder(searcher, generator)

        yield  # app runs

        logger.info("Shutting down")
        await searcher.aclose()

    app = FastAPI(title="Streaming Search Answers", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # GET /health
    # -----------------------------------------------------------------------
    @app.get("/health")
    async def health():
        return {"status": "ok", "model": settings.chat_model}

    # -----------------------------------------------------------------------
    # POST /api/query
    # -----------------------------------------------------------------------
    @app.post("/api/query", dependencies=[Depends(require_api_key)])
    async def query(req: QueryRequest, request: Request):
        responder: Responder = request.app.state.responder

        # Search failures surface as a plain 500 before any body is sent
        contexts = await responder.prepare(req.query)

        return ClosingStreamingResponse(
            responder.stream(req.query, req.rid, contexts),
            media_type="text/plain; charset=utf-8",
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
