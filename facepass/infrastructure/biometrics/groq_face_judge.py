"""Remote multimodal face judge backed by Groq's Vision Language Model API."""
# Standard library imports
import json
import logging
from typing import Any, Dict, List, Optional

# External package imports
import httpx

# Local application imports
from ...core.config import get_settings
from ...domain.exceptions import IncompatibleDescriptorError, ServiceUnavailableError
from ...domain.models.face import ConfidenceTier, FaceExtraction, FaceVerdict
from ...domain.models.ticket import Ticket
from ...domain.services.face_verifier import FaceVerifier
from ...utils.image_codec import decode_image, to_data_url

logger = logging.getLogger(__name__)


ENROLLMENT_PROMPT = (
    "Analyze this image. Does it contain exactly one clear human face suitable for "
    "facial recognition registration? It should be well-lit, facing forward, and not "
    "obstructed. Respond ONLY with JSON: "
    '{"faceDetected": boolean, "isValid": boolean, "reason": string}'
)

VERIFICATION_PROMPT = (
    "You are a security officer at an event turnstile. The first image is TARGET_IMAGE, "
    "a live capture at the gate. The second image is REFERENCE_IMAGE, the face registered "
    "for the ticket. Decide whether both images show the same person by comparing facial "
    "features carefully. Respond ONLY with JSON: "
    '{"faceDetected": boolean (a face is visible in TARGET_IMAGE), '
    '"matched": boolean, "confidence": "High" | "Medium" | "Low"}'
)


def parse_json_content(content: str) -> Optional[Dict[str, Any]]:
    """Extract a JSON object from a model reply, tolerating markdown code fences."""
    if not content:
        return None
    json_content = content
    if "```json" in json_content:
        json_start = json_content.find("```json") + 7
        json_end = json_content.find("```", json_start)
        json_content = json_content[json_start:json_end].strip()
    elif "```" in json_content:
        json_start = json_content.find("```") + 3
        json_end = json_content.find("```", json_start)
        json_content = json_content[json_start:json_end].strip()
    try:
        parsed = json.loads(json_content)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


class GroqFaceJudge(FaceVerifier):
    """
    FaceVerifier that delegates the whole judgement to a remote VLM.

    No descriptors are produced: enrollment keeps the validated capture as the
    ticket's reference image, and the gate sends live capture + reference
    image in one request. The judge is untrusted: any transport error, timeout
    or reply that is not the expected JSON becomes ServiceUnavailableError.
    """

    GROQ_CHAT_URL = "https://api.groq.com/openai/v1/chat/completions"

    uses_descriptors = False

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.groq_api_key
        self.model = model or settings.vlm_model
        self.timeout = timeout if timeout is not None else settings.verifier_timeout_seconds
        self._http_client = http_client

        if not self.api_key:
            logger.warning("GROQ_API_KEY not found in environment variables")

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self._http_client is not None:
            return await self._http_client.post(self.GROQ_CHAT_URL, headers=headers, json=payload, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.GROQ_CHAT_URL, headers=headers, json=payload)

    async def _ask(self, prompt: str, images: List[str]) -> Dict[str, Any]:
        """
        Send a prompt plus images and return the parsed JSON reply.

        Raises:
            ServiceUnavailableError: On missing key, timeout, HTTP error or malformed reply
        """
        if not self.api_key:
            raise ServiceUnavailableError("VLM API key not configured")

        content_items: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
        for image in images:
            content_items.append({"type": "image_url", "image_url": {"url": to_data_url(image)}})

        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": content_items}],
            "temperature": 0.0,
            "max_tokens": 200,
            "response_format": {"type": "json_object"},
        }

        logger.debug(f"Calling Groq VLM API with model: {self.model}")
        try:
            response = await self._post(payload)
            response.raise_for_status()
            result = response.json()
        except httpx.TimeoutException:
            logger.error("Timeout while calling Groq VLM API")
            raise ServiceUnavailableError("VLM API timeout")
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from Groq VLM API: {e.response.status_code}")
            raise ServiceUnavailableError(f"VLM API error: {e.response.status_code}")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Groq VLM API unreachable or returned invalid JSON: {e}")
            raise ServiceUnavailableError(f"VLM API failure: {e}")

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = ""

        parsed = parse_json_content(content)
        if parsed is None:
            logger.warning("Groq VLM returned an empty or non-JSON reply")
            raise ServiceUnavailableError("Malformed response from VLM")
        return parsed

    async def extract(self, image: str) -> FaceExtraction:
        decode_image(image)  # unreadable payloads never reach the remote API
        parsed = await self._ask(ENROLLMENT_PROMPT, [image])

        is_valid = parsed.get("isValid")
        if not isinstance(is_valid, bool):
            raise ServiceUnavailableError("VLM reply missing boolean 'isValid'")
        face_detected = parsed.get("faceDetected")
        if not isinstance(face_detected, bool):
            face_detected = is_valid
        reason = str(parsed.get("reason") or ("Face detected successfully" if is_valid else "Face rejected"))

        return FaceExtraction(
            face_detected=face_detected,
            is_valid=is_valid and face_detected,
            reason=reason,
        )

    async def verify(self, capture: str, ticket: Ticket) -> FaceVerdict:
        if not ticket.face_image:
            raise IncompatibleDescriptorError(
                f"Ticket {ticket.id} has no reference image for remote verification",
                details={"ticket_id": ticket.id},
            )

        decode_image(capture)
        parsed = await self._ask(VERIFICATION_PROMPT, [capture, ticket.face_image])

        face_detected = parsed.get("faceDetected", True)
        matched = parsed.get("matched")
        if not isinstance(face_detected, bool) or not isinstance(matched, bool):
            raise ServiceUnavailableError("VLM reply missing boolean 'faceDetected'/'matched'")

        if not face_detected:
            return FaceVerdict(matched=False, face_detected=False, tier=ConfidenceTier.NO_MATCH, reason="No face detected")

        confidence = ConfidenceTier.parse(parsed.get("confidence"))
        if not matched:
            label = confidence.value if confidence else "Unknown"
            return FaceVerdict(
                matched=False,
                face_detected=True,
                tier=ConfidenceTier.NO_MATCH,
                reason=f"judge non-match (confidence {label})",
            )

        if confidence is None or not confidence.is_match:
            # A match without a usable confidence label cannot be audited
            raise ServiceUnavailableError(f"VLM match reply has invalid confidence {parsed.get('confidence')!r}")

        return FaceVerdict(matched=True, face_detected=True, tier=confidence, reason="judge match")
