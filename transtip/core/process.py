"""
Process Invoker for TransTip.
Runs the external translation command, feeds it the text to translate and
streams its standard output back to a callback as it arrives.
"""
import sys
import codecs
import logging
import threading
import subprocess
from typing import Callable, List, Optional, Sequence, Set

from transtip.constants import READ_CHUNK_SIZE

ChunkCallback = Callable[[str], None]
ExitCallback = Callable[[int, str], None]

# CREATE_NO_WINDOW on Windows to prevent console popup
_CREATION_FLAGS = 0x08000000 if sys.platform == 'win32' else 0


class ProcessSpawnFailure(RuntimeError):
    """The translation command could not be started."""

    def __init__(self, command: Sequence[str], reason: str):
        self.command = list(command)
        self.reason = reason
        super().__init__(f"Cannot start {' '.join(self.command) or '<empty command>'}: {reason}")


class ProcessHandle:
    """A single running translation process.

    Each handle owns its own child process and reader threads; nothing is
    shared between handles.
    """

    def __init__(self, proc: subprocess.Popen, command: Sequence[str]):
        self._proc = proc
        self.command: List[str] = list(command)
        self.returncode: Optional[int] = None
        self._done = threading.Event()

    @property
    def pid(self) -> int:
        return self._proc.pid

    @property
    def is_running(self) -> bool:
        """True until output has ended and the process has been reaped."""
        return not self._done.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the process finished and all callbacks ran.

        Returns:
            True if finished, False on timeout
        """
        return self._done.wait(timeout)

    def cancel(self) -> None:
        """Terminate the process if it is still running."""
        if self._proc.poll() is None:
            logging.info(f"Cancelling translation process {self.pid}")
            try:
                self._proc.terminate()
            except OSError as e:
                logging.warning(f"Could not terminate process {self.pid}: {e}")


class ProcessInvoker:
    """Spawns translation processes and tracks the ones still running."""

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding
        self._active: Set[ProcessHandle] = set()
        self._lock = threading.Lock()

    def invoke(self, command: Sequence[str], input_text: str,
               on_chunk: ChunkCallback,
               on_exit: Optional[ExitCallback] = None) -> ProcessHandle:
        """Start `command`, send `input_text` and stream its output.

        The input is followed by a single newline, then stdin is closed so
        the tool sees end-of-input. `on_chunk` is called from a worker
        thread with each piece of decoded output, in order; pieces do not
        line up with lines or words. `on_exit(returncode, stderr)` is
        called once output has ended.

        Raises:
            ProcessSpawnFailure: if the command cannot be started
        """
        if not command:
            raise ProcessSpawnFailure(command, "empty command")

        try:
            proc = subprocess.Popen(
                list(command),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                creationflags=_CREATION_FLAGS
            )
        except (OSError, ValueError) as e:
            logging.error(f"Failed to spawn {command!r}: {e}")
            raise ProcessSpawnFailure(command, str(e)) from e

        handle = ProcessHandle(proc, command)
        with self._lock:
            self._active.add(handle)
        logging.info(f"Spawned {' '.join(handle.command)} (pid {proc.pid}, {len(input_text)} chars)")

        stderr_parts: List[bytes] = []
        writer = threading.Thread(
            target=self._feed_input,
            args=(proc, input_text),
            daemon=True,
            name=f"TranslateInput-{proc.pid}"
        )
        errors = threading.Thread(
            target=self._drain_stderr,
            args=(proc, stderr_parts),
            daemon=True,
            name=f"TranslateErrors-{proc.pid}"
        )
        reader = threading.Thread(
            target=self._pump_output,
            args=(handle, (writer, errors), stderr_parts, on_chunk, on_exit),
            daemon=True,
            name=f"TranslateOutput-{proc.pid}"
        )
        writer.start()
        errors.start()
        reader.start()
        return handle

    def _feed_input(self, proc: subprocess.Popen, input_text: str) -> None:
        """Write the request, then close stdin."""
        try:
            proc.stdin.write((input_text + "\n").encode(self.encoding))
            proc.stdin.flush()
        except (BrokenPipeError, OSError) as e:
            # Tool may exit before reading everything
            logging.warning(f"Could not write input to process {proc.pid}: {e}")
        finally:
            try:
                proc.stdin.close()
            except OSError:
                pass

    @staticmethod
    def _drain_stderr(proc: subprocess.Popen, stderr_parts: List[bytes]) -> None:
        try:
            stderr_parts.append(proc.stderr.read())
        except (OSError, ValueError) as e:
            logging.warning(f"Could not read stderr of process {proc.pid}: {e}")
        finally:
            proc.stderr.close()

    def _pump_output(self, handle: ProcessHandle, helpers: Sequence[threading.Thread],
                     stderr_parts: List[bytes], on_chunk: ChunkCallback,
                     on_exit: Optional[ExitCallback]) -> None:
        proc = handle._proc
        decoder = codecs.getincrementaldecoder(self.encoding)(errors='replace')
        chunks = 0

        try:
            while True:
                data = proc.stdout.read1(READ_CHUNK_SIZE)
                if not data:
                    break
                text = decoder.decode(data)
                if text:
                    chunks += 1
                    self._deliver(on_chunk, text, proc.pid)
            tail = decoder.decode(b'', final=True)
            if tail:
                chunks += 1
                self._deliver(on_chunk, tail, proc.pid)
        except (OSError, ValueError) as e:
            logging.warning(f"Output of process {proc.pid} ended early: {e}")
        finally:
            proc.stdout.close()
            for helper in helpers:
                helper.join()
            handle.returncode = proc.wait()
            with self._lock:
                self._active.discard(handle)

        stderr = b''.join(stderr_parts).decode(self.encoding, errors='replace')
        logging.info(f"Process {proc.pid} exited with {handle.returncode} after {chunks} chunk(s)")
        try:
            if on_exit:
                on_exit(handle.returncode, stderr)
        except Exception:
            logging.exception(f"Exit callback for process {proc.pid} failed")
        finally:
            handle._done.set()

    @staticmethod
    def _deliver(on_chunk: ChunkCallback, text: str, pid: int) -> None:
        try:
            on_chunk(text)
        except Exception:
            logging.exception(f"Chunk callback for process {pid} failed")

    @property
    def active(self) -> List[ProcessHandle]:
        with self._lock:
            return list(self._active)

    def cancel_all(self) -> None:
        """Terminate every process that is still running."""
        for handle in self.active:
            handle.cancel()


_default_invoker = ProcessInvoker()


def invoke(command: Sequence[str], input_text: str, on_chunk: ChunkCallback,
           on_exit: Optional[ExitCallback] = None) -> ProcessHandle:
    """Run `command` on the shared default invoker. See ProcessInvoker.invoke."""
    return _default_invoker.invoke(command, input_text, on_chunk, on_exit)
