from flask import Flask, abort, jsonify, redirect, render_template, request, session, url_for
from typing import Optional

from game_session import GameSession, GameState, create_session
from tile_engine import DIRECTIONS, SIZE, WIN_TILE, InvalidArgument

app = Flask(__name__)
app.config.from_mapping(
    SECRET_KEY="change_this_to_a_random_secret_key",
    BOARD_SIZE=SIZE,              # 新游戏默认棋盘大小
    ALLOWED_SIZES=[3, 4, 5, 6],   # 页面上可选的棋盘大小
)
# 环境变量覆盖配置，例如 SLIDE2048_SECRET_KEY、SLIDE2048_BOARD_SIZE
app.config.from_prefixed_env("SLIDE2048")


def start_new_game(size: Optional[int] = None) -> GameSession:
    """初始化一局新游戏并写入 session。"""
    game = create_session(size if size is not None else app.config["BOARD_SIZE"])
    save_game(game)
    app.logger.info("新游戏开始，棋盘大小 %d", game.size)
    return game


def load_game() -> GameSession:
    """从 session 取出当前游戏，没有或数据损坏时开新局。"""
    state = session.get("game")
    if state is None:
        return start_new_game()
    try:
        return GameSession.from_state(state)
    except InvalidArgument as exc:
        app.logger.warning("session 中的游戏数据无效，重新开局: %s", exc)
        return start_new_game()


def save_game(game: GameSession) -> None:
    """保存游戏状态到 session，并更新最高分。"""
    state = game.get_state()
    session["game"] = {
        "board": state["board"],
        "score": state["score"],
        "moves": state["moves"],
        "game_over": state["game_over"],
        "game_won": state["game_won"],
    }
    session["high_score"] = max(session.get("high_score", 0), game.score)


def current_state(game: GameSession) -> GameState:
    state = game.get_state()
    state["high_score"] = session.get("high_score", 0)
    return state


@app.route("/")
def index():
    """游戏主页面。"""
    game = load_game()
    return render_template(
        "index.html",
        state=current_state(game),
        directions=DIRECTIONS,
        win_tile=WIN_TILE,
        allowed_sizes=app.config["ALLOWED_SIZES"],
    )


@app.route("/state")
def state():
    """以 JSON 返回当前游戏状态。"""
    return jsonify(current_state(load_game()))


@app.route("/move", methods=["POST"])
def move():
    """处理移动操作。"""
    direction = request.form.get("direction")
    game = load_game()
    try:
        game.move(direction)
    except InvalidArgument as exc:
        app.logger.warning("拒绝非法移动: %s", exc)
        abort(400, description=str(exc))

    save_game(game)
    return redirect(url_for("index"))


@app.route("/reset", methods=["POST"])
def reset():
    """重新开始一局游戏（保留最高分）。"""
    raw_size = request.form.get("size")
    game = load_game()
    try:
        size = int(raw_size) if raw_size else game.size
    except ValueError:
        size = raw_size
    try:
        if raw_size and size not in app.config["ALLOWED_SIZES"]:
            raise InvalidArgument(
                f"棋盘大小必须是 {app.config['ALLOWED_SIZES']} 之一: {raw_size!r}"
            )
        game.restart(size)
    except InvalidArgument as exc:
        app.logger.warning("拒绝非法棋盘大小: %s", exc)
        abort(400, description=str(exc))

    save_game(game)
    app.logger.info("重新开局，棋盘大小 %d", game.size)
    return redirect(url_for("index"))


if __name__ == "__main__":
    app.run(debug=True)
