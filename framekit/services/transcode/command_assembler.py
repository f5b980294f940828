# framekit/services/transcode/command_assembler.py
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional

from framekit.domain.entities.resolved import Flags, ResolvedParameters

# fixed defaults; passthrough options only add keys missing here
INPUT_DEFAULTS: Flags = {}
OUTPUT_DEFAULTS: Flags = {"y": None}


def layer_flags(defaults: Flags, passthrough: Mapping[str, Any], computed: Flags) -> Flags:
    """
    defaults <- passthrough (fills missing keys only) <- computed (always wins).
    Insertion order is kept, so computed flags land after the passthrough ones.
    """
    out: Flags = dict(defaults)
    for k, v in passthrough.items():
        out.setdefault(str(k), None if v is None else str(v))
    for k, v in computed.items():
        out.pop(k, None)
        out[k] = v
    return out


def render_flags(flags: Flags) -> List[str]:
    tokens: List[str] = []
    for name, value in flags.items():
        tokens.append(f"-{name}")
        if value is not None and value != "":
            tokens.append(str(value))
    return tokens


class CommandAssembler:
    """Builds the ffmpeg argv for one transcode, as discrete tokens."""

    def __init__(
        self,
        *,
        input_options: Optional[Mapping[str, Any]] = None,
        output_options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.input_options = dict(input_options or {})
        self.output_options = dict(output_options or {})

    def input_flags(self, params: ResolvedParameters) -> Flags:
        return layer_flags(INPUT_DEFAULTS, self.input_options, params.input_flags())

    def output_flags(self, params: ResolvedParameters) -> Flags:
        return layer_flags(OUTPUT_DEFAULTS, self.output_options, params.output_flags())

    def build(
        self,
        params: ResolvedParameters,
        source: Path | str,
        dest: Path | str,
        *,
        audio: Optional[Path | str] = None,
    ) -> List[str]:
        args = render_flags(self.input_flags(params))
        args += ["-i", str(source)]
        if audio is not None:
            # video from the first input, audio from the second
            args += ["-i", str(audio), "-map", "0:v", "-map", "1:a"]
        args += render_flags(self.output_flags(params))
        args.append(str(dest))
        return args

    @staticmethod
    def extract_audio_args(source: Path | str, wav: Path | str) -> List[str]:
        return ["-y", "-i", str(source), "-vn", "-acodec", "pcm_s16le", str(wav)]
