from twig.graph_utils import topological_history
from twig.models import CheckoutOptions
from twig.repository import Repository


def test_status_shows_the_current_branch(repo: Repository):
    assert "On branch master" in repo.status()

    repo.branch("new_branch")
    repo.checkout("new_branch")

    assert "On branch new_branch" in repo.status()


def test_status_shows_when_the_working_directory_is_clean(repo: Repository):
    assert "nothing to commit, working directory clean" in repo.status()


def test_status_ignores_untracked_files(repo: Repository):
    repo.new_file("/untracked", "content")

    assert "nothing to commit" in repo.status()


def test_status_shows_the_status_of_files(repo: Repository):
    file1 = repo.new_file("/file1/path", "content")
    file2 = repo.new_file("/file2/path", "content")
    repo.add(file1, file2)
    repo.commit("commit message")
    file1 = repo.edit_file("/file1/path", "new content 1")
    file2 = repo.edit_file("/file2/path", "new content 2")

    status = repo.status()
    assert "Changes not staged for commit:" in status
    assert file1.path in status
    assert file2.path in status
    assert "Changes to be committed:" not in status

    repo.add(file1, file2)
    status = repo.status()
    assert "Changes to be committed:" in status
    assert "Changes not staged for commit:" not in status
    assert file1.path in status
    assert file2.path in status

    repo.commit("commit message 2")
    assert "nothing to commit" in repo.status()


def test_status_lists_both_groups(repo: Repository):
    repo.add(repo.new_file("/a", "1"), repo.new_file("/b", "1"))
    repo.commit("first")
    repo.edit_file("/a", "2")
    repo.add(repo.edit_file("/b", "2"))

    assert repo.status() == (
        "On branch master\n"
        "Changes not staged for commit:\n"
        "\t/a\n"
        "Changes to be committed:\n"
        "\t/b"
    )


def test_log_starts_out_empty(repo: Repository):
    assert repo.log() == ""


def test_log_shows_commits_newest_first(repo: Repository):
    repo.add(repo.new_file("/file/path", "content"))
    repo.commit("first message")
    repo.add(repo.edit_file("/file/path", "new content"))
    repo.commit("second message")

    assert repo.log() == "* second message\n* first message"


def test_log_of_a_branch_follows_its_ancestry(repo: Repository):
    repo.commit("base")
    repo.checkout("feature", CheckoutOptions(create_branch=True))
    repo.commit("feature work")
    repo.checkout("master")
    repo.commit("master work")

    assert repo.log("feature") == "* feature work\n* base"
    assert repo.log("master") == "* master work\n* base"
    assert repo.log() == "* master work\n* feature work\n* base"


def test_topological_history_lists_merges_before_both_parents(repo: Repository):
    base = repo.commit("base")
    repo.checkout("feature", CheckoutOptions(create_branch=True))
    feature = repo.commit("feature work")
    repo.checkout("master")
    master = repo.commit("master work")
    merge_commit = repo.merge("feature")

    history = topological_history(repo.commits, merge_commit.id)

    assert history[0] == merge_commit
    assert history[-1] == base
    assert set(history[1:3]) == {feature, master}


def test_topological_history_of_an_unborn_branch_is_empty(repo: Repository):
    assert topological_history(repo.commits, None) == []
