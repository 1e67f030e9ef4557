from __future__ import annotations

from typing import Any, Mapping, Optional

import logging

from flask import Flask, jsonify, request

from amazons import AmazonsError, GameSession, Move, Player, Position

logger = logging.getLogger(__name__)

SEAT_NAMES = {"white": Player.WHITE, "black": Player.BLACK}

DEFAULT_CONFIG = {
    "BOARD_SIZE": 10,
    "DIFFICULTY": "medium",
    "WHITE": "human",
    "BLACK": "ai",
    # Seconds a request waits for the AI reply; None waits until it is done.
    "AI_WAIT_TIMEOUT": None,
}


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env("AMAZONS")
    if config:
        app.config.from_mapping(config)

    session = GameSession(
        app.config["BOARD_SIZE"],
        app.config["DIFFICULTY"],
        white=app.config["WHITE"],
        black=app.config["BLACK"],
    )
    app.extensions["amazons_session"] = session

    def wait_for_ai() -> None:
        session.wait(app.config["AI_WAIT_TIMEOUT"])

    def snapshot_with_ai_move(moves_before: int) -> Any:
        snap = session.snapshot()
        history = session.game.state.history
        snap["ai_move"] = history[-1].to_dict() if len(history) > moves_before else None
        return jsonify(snap)

    @app.errorhandler(AmazonsError)
    def handle_engine_error(exc: AmazonsError):
        return jsonify({"error": str(exc), **exc.to_dict()}), 400

    @app.get("/api/state")
    def api_state():
        return jsonify(session.snapshot())

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        session.new_game(
            data.get("size", app.config["BOARD_SIZE"]),
            data.get("difficulty", app.config["DIFFICULTY"]),
            white=data.get("white", app.config["WHITE"]),
            black=data.get("black", app.config["BLACK"]),
        )
        # If White is an AI seat it opens; hand back its move with the new board.
        wait_for_ai()
        return snapshot_with_ai_move(0)

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        raw = payload.get("move")
        if not raw:
            return jsonify({"error": "Missing move"}), 400

        try:
            move = Move.from_dict(raw, session.game.state.current_player)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        if session.ai_thinking:
            return jsonify({"error": "AI is thinking"}), 409
        if session.is_current_player_ai():
            return jsonify({"error": "AI seat to move"}), 409
        moves_before = len(session.game.state.history) + 1
        if not session.play_human_move(move):
            return jsonify({"error": f"Illegal move: {move.describe()}"}), 400

        wait_for_ai()
        return snapshot_with_ai_move(moves_before)

    @app.get("/api/targets")
    def api_targets():
        try:
            origin = Position(int(request.args["row"]), int(request.args["col"]))
            destination = None
            if "to_row" in request.args:
                destination = Position(int(request.args["to_row"]), int(request.args["to_col"]))
        except (KeyError, ValueError):
            return jsonify({"error": "Expected integer row/col (and optional to_row/to_col)"}), 400
        targets = session.game.targets(origin, destination)
        return jsonify({"targets": [list(pos) for pos in targets]})

    @app.post("/api/seat")
    def api_seat():
        data = request.get_json(silent=True) or {}
        player = SEAT_NAMES.get(str(data.get("player", "")).lower())
        if player is None or "type" not in data:
            return jsonify({"error": "Expected player (white/black) and type"}), 400
        moves_before = len(session.game.state.history)
        session.set_seat(player, data["type"])
        wait_for_ai()
        return snapshot_with_ai_move(moves_before)

    @app.post("/api/cancel")
    def api_cancel():
        canceled = session.cancel_ai()
        snap = session.snapshot()
        snap["canceled"] = canceled
        return jsonify(snap)

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    create_app().run(host="127.0.0.1", port=5000, debug=True, use_reloader=False)
