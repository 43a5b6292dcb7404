# lis_console/mockapi/main.py

from typing import Any, Dict, Iterable, List, Mapping, Optional

from fastapi import FastAPI

from lis_console import API_PREFIX, APP_NAME, APP_VERSION

from .collections import InMemoryCollection
from .routers import build_collection_router

DEFAULT_COLLECTIONS = ("patients", "users", "instruments", "events")


def create_app(
    collections: Iterable[str] = DEFAULT_COLLECTIONS,
    *,
    seed: Optional[Mapping[str, List[Dict[str, Any]]]] = None,
) -> FastAPI:
    """
    컬렉션마다 `{API_PREFIX}/{name}` 경로에 라우터를 등록한 FastAPI 앱을 생성합니다.
    `seed`로 컬렉션별 초기 레코드를 넣을 수 있고, 저장소는 `app.state.collections`에 보관됩니다.
    """
    app = FastAPI(
        title=f"{APP_NAME} Mock API",
        description="In-memory REST backend for local development and tests.",
        version=APP_VERSION,
    )
    app.state.collections = {}
    seed = seed or {}

    for name in collections:
        collection = InMemoryCollection(name, seed.get(name))
        app.state.collections[name] = collection
        app.include_router(build_collection_router(collection), prefix=f"{API_PREFIX}/{name}", tags=[name])

    @app.get("/", summary="API Root")
    async def read_root():
        return {"message": f"Welcome to {APP_NAME} Mock API.", "collections": list(app.state.collections)}

    return app


app = create_app()
