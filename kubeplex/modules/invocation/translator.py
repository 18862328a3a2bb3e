import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Tuple

from kubeplex.modules.api.errors import MalformedInvocationError

logger = logging.getLogger("kubeplex.invocation")

# Address Plex hands the transcoder for callbacks; only reachable on the server host
LOOPBACK_ADDRESS = "http://127.0.0.1:32400"
FORCED_LOG_LEVEL = "debug"

ADDRESS_FLAGS = frozenset({"-progressurl", "-manifest_name", "-segment_list"})
LOG_LEVEL_FLAGS = frozenset({"-loglevel", "-loglevel_plex"})


@dataclass(frozen=True)
class Invocation:
    """Command line and environment of one transcoder invocation."""

    args: Tuple[str, ...]
    env: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def from_process(cls, argv: Sequence[str], environ: Mapping[str, str]) -> "Invocation":
        return cls(args=tuple(argv), env=tuple(environ.items()))

    @property
    def env_dict(self) -> Dict[str, str]:
        return dict(self.env)


class InvocationTranslator:
    """
    Rewrites a transcoder invocation so it works from inside the cluster.

    Callback URLs that point at the Plex server's loopback address are
    redirected to its in-cluster address, and transcoder logging is
    forced to debug.
    """

    def __init__(self, internal_address: str, loopback_address: str = LOOPBACK_ADDRESS):
        self.internal_address = internal_address
        self.loopback_address = loopback_address

    def translate(self, invocation: Invocation) -> Invocation:
        return Invocation(
            args=tuple(self.translate_args(invocation.args)),
            env=tuple(self.translate_env(invocation.env_dict).items()),
        )

    def translate_args(self, args: Sequence[str]) -> List[str]:
        """
        Return a rewritten copy of args.

        Raises:
            MalformedInvocationError: If a rewritten flag is the last argument
        """
        out = list(args)
        for i, token in enumerate(out):
            if token not in ADDRESS_FLAGS and token not in LOG_LEVEL_FLAGS:
                continue
            if i + 1 >= len(out):
                raise MalformedInvocationError(token, i)

            if token in ADDRESS_FLAGS:
                out[i + 1] = out[i + 1].replace(self.loopback_address, self.internal_address, 1)
            else:
                out[i + 1] = FORCED_LOG_LEVEL
            logger.debug(f"Rewrote {token} value to {out[i + 1]!r}")
        return out

    def translate_env(self, env: Mapping[str, str]) -> Dict[str, str]:
        # No variables need rewriting today
        return dict(env)
