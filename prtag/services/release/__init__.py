"""Release decision pipeline.

Stages, in order: version_store -> changeset -> bump -> semver -> tagging
-> notes -> publish. service.run_release sequences them.
"""
