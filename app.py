import logging
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
from errors import ChannelNotFound, DataUnavailable, InsufficientData
from llm import build_generator
from pipeline import analyze_channel
from youtube_api import YouTubeDataProvider

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

_STATUS_BY_ERROR = {
    ChannelNotFound: 404,
    DataUnavailable: 502,
    InsufficientData: 422,
}


def _ai_provider() -> str:
    if not config.has_llm():
        return "Heuristics only (no model configured)"
    return f"{config.LLM_MODEL} @ {config.LLM_BASE_URL or 'OpenAI'}"


@app.route("/api/health")
def api_health():
    return jsonify({
        "status": "online",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "aiProvider": _ai_provider(),
    })


@app.route("/api/analyze", methods=["POST"])
def api_analyze():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    channel_handle = str(data.get("channelHandle") or "").strip()

    if not channel_handle:
        return jsonify({"success": False, "error": "Channel handle is required"}), 400

    try:
        analysis = analyze_channel(
            channel_handle,
            provider=YouTubeDataProvider(),
            generator=build_generator(),
            max_workers=config.MAX_WORKERS,
        )
    except Exception as e:
        status = _STATUS_BY_ERROR.get(type(e), 500)
        if status == 500:
            logger.exception("Analysis error for %s", channel_handle)
        else:
            logger.warning("Analysis failed for %s: %s", channel_handle, e)
        return jsonify({"success": False, "error": str(e)}), status

    return jsonify({"success": True, "data": analysis.to_payload()})


if __name__ == "__main__":
    config.setup_logging()
    config.validate()
    logger.info("Channel intelligence API running on http://localhost:%d", config.PORT)
    logger.info("AI provider: %s", _ai_provider())
    app.run(port=config.PORT)
