# srcgit

Pieces for a compact, colourful Git front end, written in plain Python
with no third-party dependencies.

## What is inside

- **Display nodes** (`srcgit.term.node`): describe output as a tree of
  dataclasses — `Text`, `Block`, `MultiLine`, `Breadcrumb`, `Group`
  (a heading with an optional count), `Label`, `Column`, `Dimmed`,
  `Continued`, `IconNode`, `IndicatorNode`, `AttributeNode` and
  `StatusNode`. Helpers: `spacer()`, `text_head_1()` (first line only),
  `text_capped()` (cut with `...`), `message_with_icon()`, and
  `Node.with_status()` to colour a node by `Status`.
- **Renderer** (`srcgit.term.render`): `TermRenderer` writes a node tree
  to a text stream (standard output by default) with ANSI colours;
  `renderln` adds a trailing newline and `render_with` renders in a given
  `Color`.
- **Progress bars** (`srcgit.term.progress`): `ProgressBar` draws several
  named bars, 24 characters wide, and on later draws rewrites only the
  characters that changed; `clear()` erases them.
- **Progress feed and prompt** (`srcgit.term.feed`): `apply_event` turns
  `Transfer`, `PushTransfer`, `Packing` and `Sideband` events into updates
  of the "Remote", "Transfer" and "Packing" bars; `setup_progress_bar`
  consumes an iterable of events on a background thread and returns the
  thread; `confirm` asks a yes/no question where an empty answer is no.
- **Rebase todo** (`srcgit.rebase`): `Rebase.from_path` reads a todo list,
  skipping blank, `#` and space-indented lines; `Rebase.from_git_dir`
  reads `rebase-merge/git-rebase-todo.backup` in a git directory. Each
  line becomes a `RebaseOp` (`oid`, `type`, `message`); malformed lines
  raise `RebaseError`.
- **Revision patterns** (`srcgit.resolve`): `parse_pattern` understands
  `HEAD`, `@`, branch names and `name~N`, returning the unparsed rest and
  a `Head`, `Branch` or `Parent` value.
- **Git configuration** (`srcgit.gitconfig`): `read_config_file` parses
  git config files (including `include.path`); `Config.from_entries` and
  `Config.open_default` (system, XDG and `~/.gitconfig`) collect the user,
  commit-signing, GPG and `push.autoSetupRemote` settings, raising
  `ConfigError` when `user.email` is missing or a value is invalid.
  `parse_local_time` turns epoch seconds into a local datetime.
- **Remote helpers** (`srcgit.remote`): `parse_sideband_progress` reads
  "Counting/Compressing/Resolving" progress lines; `RemoteOpts` forwards
  them as events to a sink, keeps other remote output, records reference
  updates and raises `PushRejected` when a push negotiation shows the
  remote moved past the expected commit.
- **SSH signing** (`srcgit.signer`): `SshSigner.from_config` takes the
  signing key and, for the ssh format, `gpg.ssh.program`; `sign` runs
  `<program> -Y sign -n git -f <keyfile>` (default program `ssh`) and
  returns the signature, raising `SigningError` on failure.
- **Views** (`srcgit.views`, `srcgit.statusview`): commit headers and
  indented messages, branch names derived from commit messages, clone
  directory names, the "Created" line with insertion and deletion counts,
  added-file lines, ahead/behind indicators, the branch line, rebase and
  in-progress state lines, and staged/unstaged change groups.

## Example

```python
import sys

from srcgit.term.node import Icon, message_with_icon
from srcgit.term.render import TermRenderer
from srcgit.views import branch_name

renderer = TermRenderer(sys.stdout)
renderer.renderln(message_with_icon(Icon.CHECK, "Changes stashed"))

# A conventional commit message becomes a branch name.
print(branch_name("feat: add login page"))   # feat/add-login-page
```

Showing how far a branch is ahead of and behind its upstream:

```python
import sys

from srcgit.statusview import remote_state_indicators
from srcgit.term.render import TermRenderer

node = remote_state_indicators(3, 1)
if node is not None:
    TermRenderer(sys.stdout).renderln(node)
```

Reading an interrupted rebase:

```python
from srcgit.rebase import Rebase

rebase = Rebase.from_git_dir(".git")
for op in rebase.operations:
    print(op.type.value, op.oid, op.message)
```

## What it does not do

This is a library, not a finished tool. It installs no command, and it
does not open or change repositories itself: there is no code here that
reads objects, walks history, stages files, commits, stashes, checks out,
fetches, pushes or clones. It also has no pager and no fuzzy picker. The
views build node trees from values you supply (commit titles, ahead and
behind counts, change entries), so the repository access has to come from
elsewhere.

## Tests

The test suite uses pytest and is installed with the `test` extra:

```
pip install -e .[test]
pytest
```