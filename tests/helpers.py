from forgegraph.model.forge import VersionHistoryEntry


def make_entry(version: str, tag: str = None, commit: str = "", **kwargs):
    return VersionHistoryEntry(
        version=version, tag=tag or version, commit=commit, **kwargs
    )
