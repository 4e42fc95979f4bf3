import uvicorn

from ondc_shopify.core.config import get_settings
from ondc_shopify.main import create_app


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
