"""
Unit tests for classpath partitioning and host deduplication.
"""

from modsync.core.configurations import ConfigurationContainer, create_mod_configurations
from modsync.core.dedup import DeduplicationFilter
from modsync.core.partition import ClasspathPartitioner, Partition, subtract
from modsync.core.types import Dependency, ResolvedArtifact, file_key


def _partition(repo, *coordinates):
    mods = create_mod_configurations(ConfigurationContainer())
    declared = [Dependency.parse(c) for c in coordinates]
    for dep in declared:
        mods.mod.add(dep)
    resolver = repo.resolver()
    return ClasspathPartitioner().partition(
        declared,
        resolver.resolve(mods.top_level),
        resolver.resolve(mods.shared_classpath),
        resolver.resolve(mods.private_classpath),
    )


def _names(artifacts):
    return sorted(artifact.file_name for artifact in artifacts)


class TestClasspathPartitioner:
    def test_runtime_only_library_stays_private(self, repo):
        repo.module("A:1.0", implementation=["libX:1.0"])
        repo.module("libX:1.0", files=["libX.jar"])

        partition = _partition(repo, "A:1.0")

        assert partition.shared == []
        assert _names(partition.private[Dependency.parse("A:1.0")]) == ["A-1.0.jar", "libX.jar"]

    def test_exposed_library_is_shared(self, repo):
        repo.module("A:1.0", api=["libX:1.0"])
        repo.module("B:2.0", api=["libX:1.0"])
        repo.module("libX:1.0", files=["libX.jar"])

        partition = _partition(repo, "A:1.0", "B:2.0")

        assert _names(partition.shared) == ["libX.jar"]
        assert _names(partition.private[Dependency.parse("A:1.0")]) == ["A-1.0.jar"]
        assert _names(partition.private[Dependency.parse("B:2.0")]) == ["B-2.0.jar"]

    def test_top_level_mods_never_shared(self, repo):
        repo.module("A:1.0", api=["B:1.0"])
        repo.module("B:1.0")

        partition = _partition(repo, "A:1.0", "B:1.0")

        assert partition.shared == []
        assert _names(partition.private[Dependency.parse("B:1.0")]) == ["B-1.0.jar"]

    def test_shared_and_private_are_disjoint(self, repo):
        repo.module("A:1.0", api=["libX:1.0"], implementation=["libY:1.0"])
        repo.module("B:1.0", implementation=["libX:1.0", "libY:1.0"])
        repo.module("libX:1.0")
        repo.module("libY:1.0")

        partition = _partition(repo, "A:1.0", "B:1.0")

        shared = partition.shared_keys()
        for artifacts in partition.private.values():
            assert not shared & {a.key for a in artifacts}
        assert _names(partition.private[Dependency.parse("B:1.0")]) == ["B-1.0.jar", "libY-1.0.jar"]

    def test_mod_without_private_artifacts(self, repo):
        repo.module("A:1.0", files=[], api=["libX:1.0"])
        repo.module("B:1.0", api=["libX:1.0"])
        repo.module("libX:1.0")

        partition = _partition(repo, "A:1.0", "B:1.0")

        assert partition.private[Dependency.parse("A:1.0")] == []


class TestSubtract:
    def test_collapses_repeated_files(self, tmp_path):
        jar = tmp_path / "libX.jar"
        jar.write_bytes(b"x")
        a = ResolvedArtifact(file=jar, dependency=Dependency.parse("libX:1.0"))
        b = ResolvedArtifact(file=tmp_path / "." / "libX.jar", dependency=Dependency.parse("alias:1.0"))

        assert subtract([a, b], set()) == [a]
        assert subtract([a, b], {file_key(jar)}) == []


class TestDeduplicationFilter:
    def test_host_files_removed_everywhere(self, repo):
        repo.module("A:1.0", api=["gson:2.10"], implementation=["libX:1.0"])
        repo.module("B:1.0", api=["gson:2.10"])
        repo.module("gson:2.10")
        repo.module("libX:1.0")
        partition = _partition(repo, "A:1.0", "B:1.0")

        host = {file_key(repo.jar("gson-2.10.jar")), file_key(repo.jar("libX-1.0.jar"))}
        result = DeduplicationFilter(host).apply(partition)

        assert result.shared == []
        assert _names(result.private[Dependency.parse("A:1.0")]) == ["A-1.0.jar"]
        assert _names(result.private[Dependency.parse("B:1.0")]) == ["B-1.0.jar"]

    def test_private_loses_shared_files(self, tmp_path):
        jar = tmp_path / "libX.jar"
        jar.write_bytes(b"x")
        artifact = ResolvedArtifact(file=jar, dependency=Dependency.parse("libX:1.0"))
        mod = Dependency.parse("A:1.0")

        result = DeduplicationFilter(set()).apply(Partition(shared=[artifact], private={mod: [artifact]}))

        assert result.shared == [artifact]
        assert result.private[mod] == []

    def test_no_host_files_is_identity(self, repo):
        repo.module("A:1.0", implementation=["libX:1.0"])
        repo.module("libX:1.0")
        partition = _partition(repo, "A:1.0")

        result = DeduplicationFilter(set()).apply(partition)

        assert result.private == partition.private
