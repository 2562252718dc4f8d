"""Run the API with uvicorn: python -m facturas_os"""

import uvicorn

from facturas_os.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "facturas_os.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
