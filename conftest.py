"""
Pytest Configuration
"""
import os

# Settings se construye al importar trivo, por eso el entorno va primero
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "clave-de-pruebas-trivo")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("REDIS_URL", None)


# Test markers
def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: API tests")


collect_ignore_glob = [
    "*/__pycache__/*",
]
