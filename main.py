from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from access_console.core.config import settings
from access_console.core.exceptions import CyclicMenuHierarchyError
from access_console.core.logging import configure_logging
from access_console.endpoints import catalog, menu, selection
from access_console.middleware.exceptions import (
    cyclic_hierarchy_exception_handler,
    global_exception_handler,
    validation_exception_handler,
)
from access_console.middleware.logging import RequestLoggingMiddleware

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, global_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(CyclicMenuHierarchyError, cyclic_hierarchy_exception_handler)

app.include_router(catalog.router, prefix="/catalog", tags=["Catalog"])
app.include_router(menu.router, prefix="/menus", tags=["Menus"])
app.include_router(selection.router, prefix="/selection", tags=["Selection"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
