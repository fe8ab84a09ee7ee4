# app.py
import json
import os
from urllib.parse import urlencode

from flask import Flask, request, redirect, render_template
from docusign_esign.client.api_exception import ApiException

from config import Settings, resolve_signing_config
from envelopes import (
    envelope_from_file,
    envelope_from_definition,
    envelope_signer,
    load_definition,
    make_recipient_view_request,
)
from docusign_client import make_api_client, create_envelope, create_recipient_view


def format_api_error_body(body) -> str:
    """Pretty-print an ApiException body; falls back to the raw text."""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    try:
        return json.dumps(json.loads(body), indent=4)
    except (TypeError, ValueError):
        return str(body)


def build_envelope(settings: Settings, signing):
    if settings.envelope_source == "json":
        definition = load_definition(settings.definition_path)
        return envelope_from_definition(definition, signing.signer_name, signing.signer_email)
    return envelope_from_file(settings.document_path, signing.signer_name, signing.signer_email)


def return_url_for(base_url: str, treasures=None) -> str:
    url = f"{base_url}/dsreturn"
    if treasures:
        url += "?" + urlencode({"treasures": treasures})
    return url


def create_app(settings: Settings = None) -> Flask:
    app = Flask(__name__)
    app.config["SIGNING_SETTINGS"] = settings or Settings.from_env()

    def open_signing_ceremony():
        settings = app.config["SIGNING_SETTINGS"]
        signing = resolve_signing_config(request.args, os.environ, settings)

        # 1) Envelope definition: one document, one embedded signer, one SignHere tab
        envelope_definition = build_envelope(settings, signing)
        signer = envelope_signer(envelope_definition)

        api_client = make_api_client(settings.docusign_base_path, signing.access_token)
        try:
            # 2) Create and send the envelope
            envelope_id = create_envelope(api_client, signing.account_id, envelope_definition)
            app.logger.info("Envelope sent! envelope_id=%s", envelope_id)

            # 3) Ask for the recipient view (the signing ceremony url)
            view_request = make_recipient_view_request(
                signer, return_url_for(signing.base_url, request.args.get("treasures"))
            )
            signing_url = create_recipient_view(api_client, signing.account_id, envelope_id, view_request)
        except ApiException as e:
            if not e.body:
                raise
            app.logger.warning("DocuSign API problem: status=%s reason=%s", e.status, e.reason)
            return render_template("api_error.html", status=e.status, body=format_api_error_body(e.body))

        # 4) Send the browser to the ceremony
        return redirect(signing_url)

    @app.post("/")
    def start_ceremony():
        return open_signing_ceremony()

    @app.get("/")
    def index():
        if app.config["SIGNING_SETTINGS"].envelope_source == "json":
            return open_signing_ceremony()
        return render_template("index.html", action=request.full_path.rstrip("?"))

    @app.get("/dsreturn")
    def ds_return():
        """Landing page after the ceremony. The event is displayed, not verified."""
        return render_template(
            "dsreturn.html",
            event=request.args.get("event", ""),
            treasures=request.args.get("treasures"),
        )

    return app
