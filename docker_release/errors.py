from pathlib import Path


class DockerReleaseError(Exception):
    """Base for all errors raised during a release run"""

    pass


class PackageDescriptorError(DockerReleaseError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid package descriptor @ {path}: {reason}")


class DirtyWorkingTreeError(DockerReleaseError):
    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(
            "Repository working tree is not clean! Please commit changes and try again."
        )


class BuildMarkerNotFoundError(DockerReleaseError):
    def __init__(self, output_tail: str) -> None:
        self.output_tail = output_tail
        super().__init__(
            f"'Successfully built <image-id>' not found in the build output, last lines:\n{output_tail}"
        )


class VersionOutputError(DockerReleaseError):
    def __init__(self, output: str) -> None:
        self.output = output
        super().__init__(f"No version found in the output: {output!r}")


class NoHumanAvailableError(DockerReleaseError):
    def __init__(self, question_text: str):
        self.question_text = question_text
        super().__init__(f"Question asked but no human available: {question_text}")
