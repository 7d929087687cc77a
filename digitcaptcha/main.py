"""DigitCaptcha entrypoint."""

import uvicorn

from digitcaptcha.config.settings import get_settings


def cli() -> None:
    """CLI entrypoint. Serves over TLS when CERT_PATH and KEY_PATH are set."""
    settings = get_settings()
    uvicorn.run(
        "digitcaptcha.web.app:create_app",
        factory=True,
        host=settings.listen_addr,
        port=settings.listen_port,
        ssl_certfile=settings.cert_path if settings.tls_enabled else None,
        ssl_keyfile=settings.key_path if settings.tls_enabled else None,
        reload=settings.debug,
    )


if __name__ == "__main__":
    cli()
