"""Game version metadata model."""

from pydantic import BaseModel, ConfigDict, Field


class Artifact(BaseModel):
    path: str


class LibraryDownloads(BaseModel):
    artifact: Artifact | None = None


class Library(BaseModel):
    name: str | None = None
    downloads: LibraryDownloads | None = None


class AssetIndex(BaseModel):
    id: str


class Version(BaseModel):
    """The subset of a version JSON file needed to build a launch command."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    main_class: str = Field(alias="mainClass")
    asset_index: AssetIndex | None = Field(default=None, alias="assetIndex")
    libraries: list[Library] = Field(default_factory=list)

    def library_paths(self) -> list[str]:
        """Return the relative artifact paths of all downloadable libraries."""
        paths = []
        for library in self.libraries:
            if library.downloads is not None and library.downloads.artifact is not None:
                paths.append(library.downloads.artifact.path)
        return paths
