"""Signing commit content with an SSH key."""

from __future__ import annotations

import os
import subprocess
import tempfile
from dataclasses import dataclass

from .gitconfig import Config, GpgFormat


class SigningError(Exception):
    """Content could not be signed."""


class MissingSigningKey(SigningError):
    def __init__(self) -> None:
        super().__init__("missing signing key")


@dataclass(frozen=True)
class SshSigner:
    """Signs content with ``ssh-keygen``-style ``-Y sign``."""

    signing_key: str
    program: str | None = None

    @classmethod
    def from_config(cls, config: Config) -> SshSigner:
        """Use ``user.signingkey`` and, for the ssh format, ``gpg.ssh.program``."""
        signing_key = config.user.signing_key
        if signing_key is None:
            raise MissingSigningKey()
        program = None
        if config.gpg_format is GpgFormat.SSH:
            ssh = config.gpg.get("ssh")
            program = ssh.program if ssh is not None else None
        return cls(signing_key, program)

    def sign(self, content: bytes) -> str:
        """Return the armored signature of ``content``."""
        # The signing program reads the key from a file.
        fd, key_path = tempfile.mkstemp()
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as key_file:
                key_file.write(self.signing_key)
            result = subprocess.run(
                [self.program or "ssh", "-Y", "sign", "-n", "git", "-f", key_path],
                input=content,
                stdout=subprocess.PIPE,
                check=False,
            )
        finally:
            os.unlink(key_path)

        if result.returncode != 0:
            stderr = (result.stderr or b"").decode("utf-8")
            raise SigningError(f"failed to sign: {stderr}")
        return result.stdout.decode("utf-8")