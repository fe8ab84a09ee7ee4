# envelopes.py
import base64
import json
from pathlib import Path

from docusign_esign.models import (
    EnvelopeDefinition,
    Document,
    Signer,
    SignHere,
    Tabs,
    Recipients,
    RecipientViewRequest,
)

# "created" saves a draft, "sent" makes the ceremony available right away
ENVELOPE_STATUSES = ("created", "sent")

EMAIL_SUBJECT = "Please sign this document sent from the Python example"
EMAIL_BLURB = "Please sign this document sent from the Python example."

# Marks the signer for an embedded ceremony. Represents the signer's
# user id within this application.
CLIENT_USER_ID = "123"


def _require(**fields):
    for name, value in fields.items():
        if value is None or value == "":
            raise ValueError(f"{name} is required")


def make_document(content: bytes, name: str, file_extension: str, document_id: str = "1") -> Document:
    _require(name=name, file_extension=file_extension, document_id=document_id)
    return Document(
        document_base64=base64.b64encode(content).decode("ascii"),
        name=name,
        file_extension=file_extension,
        document_id=str(document_id),
    )


def make_sign_here(document_id, page_number, recipient_id, tab_label, x_position, y_position) -> SignHere:
    _require(document_id=document_id, page_number=page_number, recipient_id=recipient_id,
             x_position=x_position, y_position=y_position)
    return SignHere(
        document_id=str(document_id),
        page_number=str(page_number),
        recipient_id=str(recipient_id),
        tab_label=tab_label,
        x_position=str(x_position),
        y_position=str(y_position),
    )


def make_signer(name, email, recipient_id="1", routing_order="1", client_user_id=CLIENT_USER_ID,
                sign_here_tabs=()) -> Signer:
    """Signer for an embedded ceremony. Name and email are not checked locally."""
    _require(recipient_id=recipient_id, client_user_id=client_user_id)
    signer = Signer(
        name=name,
        email=email,
        recipient_id=str(recipient_id),
        routing_order=str(routing_order),
        client_user_id=str(client_user_id),
    )
    # Tabs belong to the signer, not to the document
    signer.tabs = Tabs(sign_here_tabs=list(sign_here_tabs))
    return signer


def make_envelope(document: Document, signer: Signer, subject: str = EMAIL_SUBJECT,
                  blurb: str = EMAIL_BLURB, status: str = "sent") -> EnvelopeDefinition:
    if status not in ENVELOPE_STATUSES:
        raise ValueError(f"status must be one of {ENVELOPE_STATUSES}, got {status!r}")
    return EnvelopeDefinition(
        email_subject=subject,
        email_blurb=blurb,
        documents=[document],
        recipients=Recipients(signers=[signer]),
        status=status,
    )


def envelope_from_file(path, signer_name: str, signer_email: str) -> EnvelopeDefinition:
    """
    Build the demo envelope from a local document: one signer, one SignHere
    tab at a fixed position on page 1, status 'sent'.
    """
    path = Path(path)
    document = make_document(path.read_bytes(), name="Sample document",
                             file_extension=path.suffix.lstrip(".") or "pdf", document_id="1")
    sign_here = make_sign_here(document_id="1", page_number="1", recipient_id="1",
                               tab_label="SignHereTab", x_position="195", y_position="147")
    signer = make_signer(signer_name, signer_email, recipient_id="1", routing_order="1",
                         sign_here_tabs=[sign_here])
    return make_envelope(document, signer)


def load_definition(path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def envelope_from_definition(definition: dict, signer_name=None, signer_email=None) -> EnvelopeDefinition:
    """
    Build an envelope from a pre-built envelope definition (REST camelCase keys)
    whose document, signer and tabs are already filled in.

    Subject, blurb and status are always replaced; the signer's name and email
    only when live values are given.
    """
    documents = definition.get("documents") or []
    signers = (definition.get("recipients") or {}).get("signers") or []
    if len(documents) != 1 or len(signers) != 1:
        raise ValueError(
            f"envelope definition must hold exactly one document and one signer, "
            f"got {len(documents)} document(s) and {len(signers)} signer(s)"
        )

    d = documents[0]
    document = Document(
        document_base64=d.get("documentBase64"),
        name=d.get("name"),
        file_extension=d.get("fileExtension"),
        document_id=str(d.get("documentId") or ""),
    )
    _require(documentBase64=document.document_base64, name=document.name,
             fileExtension=document.file_extension, documentId=document.document_id)

    s = signers[0]
    tabs = [
        make_sign_here(t.get("documentId") or document.document_id, t.get("pageNumber"),
                       t.get("recipientId") or s.get("recipientId"), t.get("tabLabel"),
                       t.get("xPosition"), t.get("yPosition"))
        for t in ((s.get("tabs") or {}).get("signHereTabs") or [])
    ]
    signer = make_signer(
        signer_name or s.get("name"),
        signer_email or s.get("email"),
        recipient_id=s.get("recipientId"),
        routing_order=s.get("routingOrder") or "1",
        client_user_id=s.get("clientUserId") or CLIENT_USER_ID,
        sign_here_tabs=tabs,
    )
    return make_envelope(document, signer)


def envelope_signer(envelope_definition: EnvelopeDefinition) -> Signer:
    return envelope_definition.recipients.signers[0]


def make_recipient_view_request(signer: Signer, return_url: str,
                                authentication_method: str = "None") -> RecipientViewRequest:
    """
    View request for the signer placed in the envelope. Recipient id and
    client user id must match the envelope's signer or DocuSign refuses the view.
    """
    _require(return_url=return_url)
    return RecipientViewRequest(
        authentication_method=authentication_method,
        client_user_id=signer.client_user_id,
        recipient_id=signer.recipient_id,
        return_url=return_url,
        user_name=signer.name,
        email=signer.email,
    )
