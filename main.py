# Embedded signing quickstart.
#
# This example does not include authentication. An access token must be
# supplied from the DevCenter token generator or from elsewhere, and the
# account id must be set; both can also come from query parameters.
#
# requirements: flask, docusign-esign, python-dotenv, requests
import os

import dotenv

from app import create_app
from config import Settings


def main():
    dotenv.load_dotenv()

    settings = Settings.from_env()
    app = create_app(settings)

    print(f"Your server is running on {settings.host}:{settings.port}")
    print(f"baseUrl set to {settings.base_url}")
    if settings.envelope_source == "json":
        print(f"Envelope definition: {settings.definition_path}")
    else:
        print(f"Document: {settings.document_path}")

    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"
    app.run(host=settings.host, port=settings.port, debug=debug, threaded=True)


if __name__ == "__main__":
    main()
