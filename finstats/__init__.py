"""Finance stats dashboard for the chat mini-app."""

from . import client, config, errors, host, snapshot, state, synth, utils, viz

__all__ = [
	"client",
	"config",
	"errors",
	"host",
	"snapshot",
	"state",
	"synth",
	"utils",
	"viz",
]
