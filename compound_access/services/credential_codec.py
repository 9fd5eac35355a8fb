# =======================================================================================
# compound_access/services/credential_codec.py - QR Credential Issue / Validation
# =======================================================================================
import base64
import io
import json
from datetime import datetime, timedelta, timezone
from typing import Optional

import qrcode
from PIL import Image
from pydantic import ValidationError

from ..config import config
from ..models.schemas import CredentialPayload, Resident
from ..utils.exceptions import CredentialRenderError, InvalidCredentialError
from ..utils.validators import CredentialValidator

DATA_URI_PREFIX = "data:image/png;base64,"


class CredentialCodec:
    """
    Builds the access credential of a resident and reads it back.

    The credential is plain JSON ({residentId, unitNumber, issuedAt, validUntil})
    rendered into a QR image. It is not signed: anyone holding the text can
    present it, so validation only checks shape and expiry.
    """

    def __init__(
        self,
        validity_days: Optional[int] = None,
        width: Optional[int] = None,
        margin: Optional[int] = None,
    ):
        self.validity = timedelta(
            days=config.CREDENTIAL_VALIDITY_DAYS if validity_days is None else validity_days
        )
        self.width = width or config.QR_IMAGE_WIDTH
        self.margin = config.QR_MARGIN if margin is None else margin

    # ---------- issue ----------

    def build_payload(self, resident: Resident, now: Optional[datetime] = None) -> CredentialPayload:
        issued_at = now or datetime.now(timezone.utc)
        return CredentialPayload(
            residentId=resident.id,
            unitNumber=resident.unitNumber,
            issuedAt=issued_at,
            validUntil=issued_at + self.validity,
        )

    @staticmethod
    def serialize(payload: CredentialPayload) -> str:
        return json.dumps(payload.model_dump(mode="json", exclude_none=True))

    def _make_qr_png(self, data: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=self.margin,
        )
        qr.add_data(data)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    def render_image(self, payload: CredentialPayload) -> str:
        """Render the payload JSON as a fixed-width QR PNG data URI."""
        try:
            qr_png = self._make_qr_png(self.serialize(payload))
            img = Image.open(io.BytesIO(qr_png)).convert("RGB")
            img = img.resize((self.width, self.width), Image.NEAREST)

            out = io.BytesIO()
            img.save(out, format="PNG")
        except Exception as e:
            if config.API_DEBUG:
                print(f"[credential] Error generating QR code: {e}")
            raise CredentialRenderError("Failed to generate QR code") from e

        return DATA_URI_PREFIX + base64.b64encode(out.getvalue()).decode("ascii")

    def issue(self, resident: Resident, now: Optional[datetime] = None) -> str:
        """Issue a fresh credential image for the resident."""
        return self.render_image(self.build_payload(resident, now))

    # ---------- validate ----------

    def decode(self, raw: str, now: Optional[datetime] = None) -> CredentialPayload:
        """Parse credential text, raising InvalidCredentialError with the reason."""
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError, RecursionError) as e:
            raise InvalidCredentialError(f"Credential is not valid JSON: {e}") from e

        data = CredentialValidator.require_object(parsed)
        CredentialValidator.require_fields(data)

        try:
            payload = CredentialPayload.model_validate(data)
        except ValidationError as e:
            raise InvalidCredentialError(f"Malformed credential: {e.error_count()} invalid field(s)") from e
        except OverflowError as e:
            raise InvalidCredentialError(f"Malformed credential: {e}") from e

        CredentialValidator.check_not_expired(payload.validUntil, now)
        return payload

    def validate(self, raw: str, now: Optional[datetime] = None) -> Optional[CredentialPayload]:
        """Return the parsed payload, or None when the credential is unusable."""
        try:
            return self.decode(raw, now)
        except InvalidCredentialError as e:
            if config.API_DEBUG:
                print(f"[credential] Invalid QR code data: {e}")
            return None
