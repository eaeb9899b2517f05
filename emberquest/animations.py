"""Reading animation descriptions from configuration files."""

from __future__ import annotations

import re
from dataclasses import fields
from pathlib import Path
from typing import Callable

from emberquest.ecs import ANIM_CONF, Animation, IntRect, Vec2
from emberquest.errors import ConfigError, report
from emberquest.words import split_words

_SEPARATORS = "=\n "
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _value(line: str, what: str) -> str:
    words = split_words(line, _SEPARATORS)
    if len(words) < 2:
        raise ConfigError(f"Invalid {what} :{line}")
    return words[1]


def _parts(line: str, what: str, count: int) -> list[str]:
    parts = split_words(_value(line, what), ",")
    if len(parts) != count:
        raise ConfigError(f"Invalid {what} :{line}")
    return parts


def _set_name(anim: Animation, line: str) -> None:
    anim.name = _value(line, "name")


def _set_base_rect(anim: Animation, line: str) -> None:
    left, top, width, height = (_atoi(p) for p in
                                _parts(line, "base rect", 4))
    anim.base_text_rect = IntRect(left, top, width, height)


def _set_frame_count(anim: Animation, line: str) -> None:
    anim.frame_count = _atoi(_value(line, "frame count"))
    if anim.frame_count <= 0:
        raise ConfigError(f"Invalid frame count :{line}")


def _set_frame_size(anim: Animation, line: str) -> None:
    width, height = (_atoi(p) for p in _parts(line, "frame size", 2))
    anim.frame_size = Vec2(width, height)


def _set_frame_rate(anim: Animation, line: str) -> None:
    anim.frame_rate = _atoi(_value(line, "frame rate"))
    if anim.frame_rate <= 0:
        raise ConfigError(f"Invalid frame rate :{line}")


def _set_scale(anim: Animation, line: str) -> None:
    x, y = (_atof(p) for p in _parts(line, "scale", 2))
    anim.scale = Vec2(x, y)


def _set_filename(anim: Animation, line: str) -> None:
    anim.filename = _value(line, "texture name")


ANIM_FLAGS: dict[str, Callable[[Animation, str], None]] = {
    "name": _set_name,
    "base_rect": _set_base_rect,
    "frame_count": _set_frame_count,
    "frame_size": _set_frame_size,
    "frame_rate": _set_frame_rate,
    "scale": _set_scale,
    "filename": _set_filename,
}


def parse_animation_line(anim: Animation, line: str) -> None:
    """Apply one ``key=value`` line to ``anim``; unknown keys are ignored.

    Raises ConfigError when the line is empty or its value is invalid.
    """
    words = split_words(line, _SEPARATORS)
    if not words:
        raise ConfigError(f"Invalid line: {line}")
    setter = ANIM_FLAGS.get(words[0])
    if setter is not None:
        setter(anim, line)


def _reset(anim: Animation) -> None:
    fresh = Animation()
    for spec in fields(anim):
        setattr(anim, spec.name, getattr(fresh, spec.name))


def _strip_newline(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


def load_animation(anim: Animation, path: str | Path) -> None:
    """Fill ``anim`` from the description file at ``path``.

    Reading stops at the first empty line. A bad line is reported and
    clears the animation before the following lines are read.
    Raises ConfigError when the file cannot be opened.
    """
    try:
        stream = open(path, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Fail openning: {path}") from exc
    with stream:
        for raw in stream:
            line = _strip_newline(raw)
            if not line:
                break
            try:
                parse_animation_line(anim, line)
            except ConfigError as exc:
                report(str(exc), "\n")
                _reset(anim)


def read_animation_conf(path: str | Path = ANIM_CONF) -> list[Animation]:
    """Load every animation listed in the configuration file at ``path``.

    The first line gives how many animations follow, one description file
    per line; reading stops at an empty line or once that many are read.
    Raises ConfigError when the file cannot be opened or is empty.
    """
    try:
        stream = open(path, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Fail openning: {path}") from exc
    animations: list[Animation] = []
    with stream:
        first = stream.readline()
        if not first:
            raise ConfigError("Fail reading line")
        count = _atoi(first)
        for raw in stream:
            if len(animations) >= count:
                break
            line = _strip_newline(raw)
            if not line:
                break
            anim = Animation(index=len(animations))
            try:
                load_animation(anim, line)
            except ConfigError as exc:
                report(str(exc), "\n")
            animations.append(anim)
    return animations