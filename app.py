"""
app.py
------
Flask entry point for the chat-reply server.

Routes
------
POST /chat      → {"message": str} → {"reply": str}
GET  /reload    → Re-read the Q/A dataset from disk
GET  /health    → Simple health-check endpoint
GET  /<path>    → Front-end static files; unknown paths get index.html
"""

import os
import logging

from dotenv import load_dotenv
from flask import Flask, request, jsonify, session, send_from_directory
from flask_cors import CORS

from chat_engine    import get_reply
from dataset_engine import QADataset
from llm_client     import DEFAULT_MODEL

load_dotenv()

# --------------------------------------------------------------------------- #
#  App configuration                                                           #
# --------------------------------------------------------------------------- #

logging.basicConfig(
    level  = logging.INFO,
    format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_BASE_DIR = os.path.dirname(os.path.abspath(__file__))

app = Flask(__name__, static_folder=None)
app.secret_key = os.environ.get("FLASK_SECRET", "dev-secret-change-in-prod")
CORS(app)

app.config["GROQ_API_KEY"]   = os.environ.get("GROQ_API_KEY")
app.config["GROQ_MODEL"]     = os.environ.get("GROQ_MODEL", DEFAULT_MODEL)
app.config["CHAT_DATA_PATH"] = os.environ.get(
    "CHAT_DATA_PATH", os.path.join(_BASE_DIR, "data", "data.json")
)
app.config["FRONTEND_DIR"]   = os.environ.get(
    "FRONTEND_DIR", os.path.join(_BASE_DIR, "frontend")
)

if not app.config["GROQ_API_KEY"]:
    logger.info("No GROQ_API_KEY set; LLM tier disabled, falling through to web search.")

DATASET = QADataset(app.config["CHAT_DATA_PATH"])
DATASET.load()

NO_MESSAGE_REPLY   = "No message received."
SERVER_ERROR_REPLY = "Internal server error."


# --------------------------------------------------------------------------- #
#  API routes                                                                  #
# --------------------------------------------------------------------------- #

@app.route("/chat", methods=["POST"])
def chat():
    payload = request.get_json(silent=True)
    message = payload.get("message") if isinstance(payload, dict) else None
    if not isinstance(message, str) or not message:
        return jsonify({"reply": NO_MESSAGE_REPLY}), 400

    try:
        reply = get_reply(
            message,
            state   = session,
            dataset = DATASET,
            api_key = app.config["GROQ_API_KEY"],
            model   = app.config["GROQ_MODEL"],
        )
    except Exception as exc:
        logger.exception("Unhandled chat error: %s", exc)
        return jsonify({"reply": SERVER_ERROR_REPLY}), 500

    return jsonify({"reply": reply})


@app.route("/reload", methods=["GET"])
def reload_dataset():
    if DATASET.load():
        return jsonify({"message": f"Dataset reloaded successfully ✅ ({len(DATASET)} entries)"})
    return jsonify({"message": "Could not read the dataset; continuing with an empty dataset."})


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "service": "chat-reply-server", "entries": len(DATASET)})


# --------------------------------------------------------------------------- #
#  Front-end                                                                   #
# --------------------------------------------------------------------------- #

@app.route("/", defaults={"path": ""}, methods=["GET"])
@app.route("/<path:path>", methods=["GET"])
def frontend(path: str):
    root = app.config["FRONTEND_DIR"]
    if path and os.path.isfile(os.path.join(root, path)):
        return send_from_directory(root, path)
    return send_from_directory(root, "index.html")


# --------------------------------------------------------------------------- #
#  Error handlers                                                              #
# --------------------------------------------------------------------------- #

@app.errorhandler(404)
def not_found(e):
    return jsonify({"error": "Endpoint not found."}), 404


@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({"error": "Method not allowed."}), 405


@app.errorhandler(500)
def server_error(e):
    return jsonify({"reply": SERVER_ERROR_REPLY}), 500


# --------------------------------------------------------------------------- #
#  Entry point                                                                 #
# --------------------------------------------------------------------------- #

if __name__ == "__main__":
    port  = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "false").lower() == "true"
    logger.info("Server running at http://localhost:%d", port)
    app.run(host="0.0.0.0", port=port, debug=debug)
