"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Configure a hermetic TEST environment before config is imported.
# Remote store and summarizer stay unconfigured unless a test injects them.
os.environ["RUNTIME_ENVIRONMENT"] = "TEST"
os.environ["DB_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_ANON_KEY"] = ""
os.environ["GEMINI_API_KEY"] = ""
os.environ["TIMEZONE"] = "Asia/Taipei"

from enums.product_category import ProductCategory
from models.product import ProductDTO, CategoryPricingRuleDTO, FixedPriceOptionDTO
from utils.catalog_loader import load_catalog


# ============================================================================
# Catalog Fixtures
# ============================================================================

@pytest.fixture
def catalog():
    """The shipped catalog (catalog/products.json)."""
    return load_catalog()


@pytest.fixture
def shark_rule():
    return CategoryPricingRuleDTO(standard_box_price=100, min_custom_price=100)


@pytest.fixture
def dish_rule():
    return CategoryPricingRuleDTO(standard_box_price=100, min_custom_price=50)


@pytest.fixture
def belly_meat():
    """Weighed product: cost 150, selling price 360 per 600 g."""
    return ProductDTO(
        id="ss_bellymeat",
        name="鯊魚腹肉",
        category=ProductCategory.SHARK_SMOKE,
        cost_per_unit=150,
        default_selling_price_per_unit=360
    )


@pytest.fixture
def dried_fish():
    """Product with fixed-price options."""
    return ProductDTO(
        id="sd_driedfish",
        name="小魚干",
        category=ProductCategory.SMALL_DISH,
        cost_per_unit=235,
        default_selling_price_per_unit=650,
        fixed_prices=[
            FixedPriceOptionDTO(label="標準盒", price=130),
            FixedPriceOptionDTO(label="特惠包", price=180),
        ]
    )


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine (in-memory SQLite shared across connections)."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

    from db import create_db_and_tables
    await create_db_and_tables(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_session(test_session_maker):
    """Create test database session."""
    async with test_session_maker() as session:
        yield session
        await session.rollback()


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def http_stub():
    """
    Start local aiohttp servers that answer every request with one fixed response.

    Usage: base_url = await http_stub("<html>gateway</html>", content_type="text/html")
    """
    servers = []

    async def start(body: str, content_type: str = "application/json", status: int = 200) -> str:
        async def handler(request):
            return web.Response(text=body, content_type=content_type, status=status)

        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", handler)
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return str(server.make_url(""))

    yield start

    for server in servers:
        await server.close()
