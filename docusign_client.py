# docusign_client.py
from docusign_esign import ApiClient
from docusign_esign.apis import EnvelopesApi


class SigningServiceError(RuntimeError):
    """DocuSign answered with success but without the value the ceremony needs."""


def make_api_client(base_path: str, access_token: str) -> ApiClient:
    """API client for one request; the access token is supplied from outside."""
    api_client = ApiClient()
    api_client.host = base_path
    api_client.set_default_header("Authorization", f"Bearer {access_token}")
    return api_client


def create_envelope(api_client: ApiClient, account_id: str, envelope_definition) -> str:
    """
    Creates (and, with status 'sent', sends) the envelope; returns the envelope_id.
    ApiException propagates to the caller.
    """
    envelopes_api = EnvelopesApi(api_client)
    results = envelopes_api.create_envelope(account_id=account_id, envelope_definition=envelope_definition)
    envelope_id = getattr(results, "envelope_id", None)
    if not envelope_id:
        raise SigningServiceError("create_envelope returned no envelope_id")
    return envelope_id


def create_recipient_view(api_client: ApiClient, account_id: str, envelope_id: str, view_request) -> str:
    """Requests the signing ceremony url for the embedded signer."""
    envelopes_api = EnvelopesApi(api_client)
    results = envelopes_api.create_recipient_view(
        account_id=account_id,
        envelope_id=envelope_id,
        recipient_view_request=view_request,
    )
    url = getattr(results, "url", None)
    if not url:
        raise SigningServiceError(f"create_recipient_view returned no url for envelope {envelope_id}")
    return url
