"""Tests for shard naming and writing."""

import pytest

from total_order_sort.job.types import REDUCE_TASK, JobId
from total_order_sort.shard.writer import ShardWriter, check_output_specs, shard_path


class TestShardPath:
    """Test cases for shard_path."""

    def test_name_without_extension(self, tmp_path) -> None:
        path = shard_path(tmp_path, "input.tsv", "attempt_x_0001_r_000000_0")
        assert path == tmp_path / "input.tsv_attempt_x_0001_r_000000_0"

    def test_name_with_extension(self, tmp_path) -> None:
        assert shard_path(tmp_path, "in", "a1", "txt").name == "in_a1.txt"
        assert shard_path(tmp_path, "in", "a1", ".txt").name == "in_a1.txt"

    def test_jobs_sharing_output_dir_never_collide(self, tmp_path) -> None:
        """Test that shards of concurrent jobs get distinct paths, even for equal file names."""
        jobs = [JobId("tracker", 1), JobId("tracker", 2)]
        paths = [
            shard_path(tmp_path, name, str(job.attempt(REDUCE_TASK, p)))
            for job in jobs
            for name in ("a.tsv", "b.tsv")
            for p in range(4)
        ]
        assert len(set(paths)) == len(paths)


class TestCheckOutputSpecs:
    """Test cases for check_output_specs."""

    def test_creates_missing_directory(self, tmp_path) -> None:
        output = tmp_path / "out" / "nested"
        assert check_output_specs(output) == output
        assert output.is_dir()

    def test_accepts_existing_directory_with_files(self, tmp_path) -> None:
        """Test that another job's shards in the directory are not an error."""
        (tmp_path / "other.tsv_attempt_1").write_text("x\n")
        check_output_specs(tmp_path)
        check_output_specs(tmp_path)
        assert (tmp_path / "other.tsv_attempt_1").read_text() == "x\n"

    def test_rejects_regular_file(self, tmp_path) -> None:
        output = tmp_path / "out"
        output.write_text("")
        with pytest.raises(NotADirectoryError):
            check_output_specs(output)


class TestShardWriter:
    """Test cases for ShardWriter."""

    def test_commits_on_success(self, tmp_path) -> None:
        path = tmp_path / "shard"
        with ShardWriter(path) as writer:
            writer.write(b"1\n")
            writer.write(b"2")
            assert not path.exists()

        assert path.read_bytes() == b"1\n2\n"
        assert writer.records_written == 2
        assert [p.name for p in tmp_path.iterdir()] == ["shard"]

    def test_discards_on_failure(self, tmp_path) -> None:
        path = tmp_path / "shard"
        with pytest.raises(RuntimeError):
            with ShardWriter(path) as writer:
                writer.write(b"1\n")
                raise RuntimeError("task crashed")

        assert list(tmp_path.iterdir()) == []

    def test_empty_shard(self, tmp_path) -> None:
        path = tmp_path / "shard"
        with ShardWriter(path):
            pass
        assert path.read_bytes() == b""

    def test_write_outside_context_fails(self, tmp_path) -> None:
        with pytest.raises(RuntimeError, match="not open"):
            ShardWriter(tmp_path / "shard").write(b"1\n")
