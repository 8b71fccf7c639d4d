"""Persistence layer — checksum-framed binary save/load of engine state."""

from rookery.state.codec import (
    LoadedState,
    PlayerRecord,
    decode_engine,
    decode_piece,
    decode_player,
    encode_engine,
    encode_piece,
    encode_player,
)
from rookery.state.frame import FrameReader, FrameWriter, checksum, unwrap_frame, wrap_frame

__all__ = [
    "FrameReader",
    "FrameWriter",
    "LoadedState",
    "PlayerRecord",
    "checksum",
    "decode_engine",
    "decode_piece",
    "decode_player",
    "encode_engine",
    "encode_piece",
    "encode_player",
    "unwrap_frame",
    "wrap_frame",
]
