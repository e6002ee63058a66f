import argparse
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional

from fastapi import FastAPI
import socketio

from go_board import BOARD_SIZES
from go_errors import IllegalMoveError, InvalidPhaseError, OutOfBoundsError
from go_game import GoGame, new_game

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 3000
    board_size: int = 9
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> 'ServerConfig':
        return cls(
            host=os.environ.get("HOST", cls.host),
            port=int(os.environ.get("PORT", cls.port)),
            board_size=int(os.environ.get("GO_BOARD_SIZE", cls.board_size)),
            log_level=os.environ.get("LOG_LEVEL", cls.log_level).upper(),
        )


config = ServerConfig.from_env()

# FastAPI and Socket.IO setup
app = FastAPI()
sio = socketio.AsyncServer(cors_allowed_origins="*", async_mode='asgi')
socket_app = socketio.ASGIApp(sio, app)


@app.get("/")
async def read_index():
    return {
        'name': 'go-rules-server',
        'boardSizes': list(BOARD_SIZES),
        'defaultBoardSize': config.board_size,
    }


# Game storage, one independent session per client
games: Dict[str, GoGame] = {}


def _point(data) -> Optional[tuple]:
    try:
        return int(data['x']), int(data['y'])
    except (KeyError, TypeError, ValueError):
        return None


async def _emit_state(sid, game: GoGame):
    await sio.emit('gameState', game.current_state(), room=sid)


async def _session(sid) -> Optional[GoGame]:
    game = games.get(sid)
    if game is None:
        await sio.emit('error', 'No game found', room=sid)
    return game


@sio.event
async def connect(sid, environ):
    logger.info("New client connected: %s", sid)


@sio.event
async def disconnect(sid):
    logger.info("Client disconnected: %s", sid)
    games.pop(sid, None)


@sio.event
async def newGame(sid, board_size=None):
    if board_size is None:
        board_size = config.board_size
    try:
        game = new_game(int(board_size))
    except (TypeError, ValueError) as e:
        await sio.emit('error', str(e), room=sid)
        return
    games[sid] = game
    await _emit_state(sid, game)


@sio.event
async def makeMove(sid, data):
    game = await _session(sid)
    if game is None:
        return

    point = _point(data)
    if point is None:
        await sio.emit('error', 'Move needs integer x and y', room=sid)
        return
    x, y = point

    try:
        game.play(x, y)
    except IllegalMoveError as e:
        logger.info("Rejected move for %s: %s", sid, e)
        await sio.emit('invalidMove', {'x': x, 'y': y, 'reason': e.reason}, room=sid)
        return
    except (InvalidPhaseError, OutOfBoundsError) as e:
        await sio.emit('error', str(e), room=sid)
        return

    await _emit_state(sid, game)


@sio.event
async def pass_move(sid):
    game = await _session(sid)
    if game is None:
        return
    game.pass_turn()
    await _emit_state(sid, game)


@sio.event
async def undo(sid):
    game = await _session(sid)
    if game is None:
        return
    game.undo()
    await _emit_state(sid, game)


@sio.event
async def toggleDead(sid, data):
    game = await _session(sid)
    if game is None:
        return

    point = _point(data)
    if point is None:
        await sio.emit('error', 'Point needs integer x and y', room=sid)
        return

    try:
        game.toggle_dead(*point)
    except (InvalidPhaseError, OutOfBoundsError) as e:
        await sio.emit('error', str(e), room=sid)
        return

    await _emit_state(sid, game)


@sio.event
async def getScore(sid):
    game = await _session(sid)
    if game is None:
        return
    await sio.emit('score', game.score(), room=sid)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Serve Go games over Socket.IO.')
    parser.add_argument('--host', default=config.host, help='Interface to bind')
    parser.add_argument('--port', type=int, default=config.port, help='Port to listen on')
    parser.add_argument('--board-size', type=int, default=config.board_size,
                        choices=BOARD_SIZES, help='Default board size for new games')
    parser.add_argument('--log-level', default=config.log_level,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        type=str.upper, help='Logging level')
    return parser.parse_args(argv)


def main(argv=None):
    import uvicorn

    args = parse_args(argv)
    config.host = args.host
    config.port = args.port
    config.board_size = args.board_size
    config.log_level = args.log_level

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Serving on %s:%d (default board %dx%d)",
                config.host, config.port, config.board_size, config.board_size)
    uvicorn.run(socket_app, host=config.host, port=config.port,
                log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
