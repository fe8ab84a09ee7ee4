# config.py
import os
from dataclasses import dataclass
from pathlib import Path

DEMO_BASE_PATH = "https://demo.docusign.net/restapi"
DEMO_DOCUMENTS = Path(__file__).with_name("demo_documents")

ENVELOPE_SOURCES = ("file", "json")

# Placeholders sent to DocuSign when nothing else is configured (file source)
PLACEHOLDERS = {
    "ACCESS_TOKEN": "{access_token}",
    "ACCOUNT_ID": "{account_id}",
    "USER_FULLNAME": "{user_fullname}",
    "USER_EMAIL": "{user_email}",
}


def resolve_base_url(host: str, port, environ) -> str:
    """Externally reachable url of this server, used to build the return url.

    BASE_URL (or RETURN_URL) wins. Otherwise a glitch.com project domain,
    otherwise a guess from the listening host and port.
    """
    explicit = environ.get("BASE_URL") or environ.get("RETURN_URL")
    if explicit:
        return explicit.rstrip("/")
    project_domain = environ.get("PROJECT_DOMAIN")
    if project_domain:
        return f"https://{project_domain}.glitch.me"
    return f"http://{host}:{port}"


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, built once at startup and never mutated."""
    host: str
    port: int
    base_url: str
    envelope_source: str = "file"
    docusign_base_path: str = DEMO_BASE_PATH
    document_path: Path = DEMO_DOCUMENTS / "World_Wide_Corp_lorem.pdf"
    definition_path: Path = DEMO_DOCUMENTS / "envelope_definition.json"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ
        host = environ.get("HOST") or "localhost"
        port = int(environ.get("PORT") or 3000)

        envelope_source = (environ.get("ENVELOPE_SOURCE") or "file").lower()
        if envelope_source not in ENVELOPE_SOURCES:
            raise RuntimeError(f"ENVELOPE_SOURCE must be one of {ENVELOPE_SOURCES}, got {envelope_source!r}")

        return cls(
            host=host,
            port=port,
            base_url=resolve_base_url(host, port, environ),
            envelope_source=envelope_source,
            docusign_base_path=environ.get("DOCUSIGN_BASE_PATH") or DEMO_BASE_PATH,
            document_path=Path(environ.get("DOCUMENT_PATH") or cls.document_path),
            definition_path=Path(environ.get("ENVELOPE_DEFINITION_PATH") or cls.definition_path),
        )


@dataclass(frozen=True)
class SigningConfig:
    access_token: str
    account_id: str
    signer_name: str
    signer_email: str
    base_url: str


def _lookup(name: str, args, environ, use_placeholders: bool):
    return environ.get(name) or args.get(name) or (PLACEHOLDERS[name] if use_placeholders else None)


def resolve_signing_config(args, environ, settings: Settings) -> SigningConfig:
    """Resolve the per-request values: environment, then query string, then default.

    Nothing is validated here; DocuSign rejects a bad token or account id.
    """
    use_placeholders = settings.envelope_source == "file"
    return SigningConfig(
        access_token=_lookup("ACCESS_TOKEN", args, environ, use_placeholders),
        account_id=_lookup("ACCOUNT_ID", args, environ, use_placeholders),
        signer_name=_lookup("USER_FULLNAME", args, environ, use_placeholders),
        signer_email=_lookup("USER_EMAIL", args, environ, use_placeholders),
        base_url=settings.base_url,
    )
