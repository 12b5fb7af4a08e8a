import logging
import os
import sys

from flask import Flask, jsonify, request

# Ensure project root is in path for imports
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from assessment_core.alignment import tokenize_reference
from assessment_core.config import load_settings
from assessment_core.errors import AssessmentError, ValidationError

SETTINGS = load_settings()

logging.basicConfig(
    level=SETTINGS.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Request body is read and pushed to the engine in chunks of this size
AUDIO_CHUNK_BYTES = 32000

# A continuous result needs more than one reconciled word to be reported
MIN_RESULT_WORDS = 2

# ============================================================================
# ENGINE
# ============================================================================
_ENGINE = None


def get_engine():
    """Build the recognition engine on first use."""
    global _ENGINE
    if _ENGINE is None:
        from assessment_core.engine.azure_recognizer import AzureSpeechEngine
        _ENGINE = AzureSpeechEngine(SETTINGS)
    return _ENGINE


def iter_request_audio(chunk_size=AUDIO_CHUNK_BYTES):
    """Yield the raw PCM request body chunk by chunk."""
    while True:
        chunk = request.stream.read(chunk_size)
        if not chunk:
            break
        yield chunk


def parse_audio_duration(raw):
    """X-Audio-Duration in seconds; anything unparseable counts as 0."""
    try:
        return float(raw) if raw else 0.0
    except ValueError:
        return 0.0


def failure(message, status=500):
    return jsonify({"code": status, "message": message}), status

# ============================================================================
# ROUTES
# ============================================================================
@app.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "ok"})


@app.route('/pronunciationAssessment', methods=['POST'])
def pronunciation_assessment():
    """Assess streamed audio against the reference text in X-Reference-Text."""
    reference_text = request.headers.get('X-Reference-Text')
    if not reference_text:
        return jsonify({"error": "X-Reference-Text header is required."}), 400
    if not tokenize_reference(reference_text):
        return jsonify({"error": "X-Reference-Text contains no words."}), 400

    audio_duration = parse_audio_duration(request.headers.get('X-Audio-Duration'))
    is_short_audio = SETTINGS.is_short_audio(audio_duration)

    try:
        engine = get_engine()

        if is_short_audio:
            result = engine.assess_short(reference_text, iter_request_audio())
            if result.recognized:
                return jsonify({
                    "code": 200,
                    "message": "Success",
                    "data": {"Scores": result.scores, "Words": result.words},
                })
            if result.reason == "NoMatch":
                return failure("NoMatch")
            return failure(f"Recognition failed with reason: {result.reason}")

        result = engine.assess_continuous(reference_text, iter_request_audio())
        if len(result.words) >= MIN_RESULT_WORDS:
            return jsonify({"code": 200, "message": "Success", "data": result.to_dict()})
        error = result.recognition_error.value if result.recognition_error else None
        return failure(f"Recognition failed with reason code: {error}")

    except ValidationError as e:
        logger.warning("Assessment rejected: %s", e)
        return failure(str(e), 400)
    except AssessmentError as e:
        logger.error("Recognition failed: %s", e)
        return failure("An error occurred during recognition.")
    except Exception:
        logger.exception("Unexpected error while processing pronunciation assessment")
        return failure("An error occurred during recognition.")


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=SETTINGS.port)
