import io
import os
import re
import subprocess
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from ecdsa_quirks import cli
from ecdsa_quirks.exceptions import InternalConsistencyError
from ecdsa_quirks.hashing import digest_to_int, hash_message
from ecdsa_quirks.secp256k1 import recover_address

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

MESSAGE1 = "Ethereum the world computer"
MESSAGE2 = "Bitcoin the store of value"


def run_cli(*args):
    return subprocess.run(
        [sys.executable, '-m', 'ecdsa_quirks', *args],
        cwd=REPO_ROOT,
        capture_output=True,
        text=True,
        timeout=120,
    )


def parse_output(stdout):
    fields = {}
    for line in stdout.splitlines():
        if ': ' in line:
            key, value = line.split(': ', 1)
            fields[key] = value
    return fields


class TestCliProcess(unittest.TestCase):

    def test_generates_signature(self):
        proc = run_cli('--m1', MESSAGE1, '--m2', MESSAGE2, '--eip191')
        self.assertEqual(proc.returncode, 0, f"stderr: {proc.stderr}")

        fields = parse_output(proc.stdout)
        self.assertRegex(fields['Private key'], r'^0x[0-9a-f]{64}$')
        self.assertRegex(fields['Address'], r'^0x[0-9a-fA-F]{40}$')
        self.assertEqual(fields['Message1'], MESSAGE1)
        self.assertEqual(fields['Message2'], MESSAGE2)
        self.assertRegex(fields['Signature1'], r'^0x[0-9a-f]{128}(1b|1c)$')
        self.assertRegex(fields['Signature2'], r'^0x[0-9a-f]{128}(1b|1c)$')
        self.assertEqual(fields['Signature1'][:-2], fields['Signature2'][:-2])

        h1 = digest_to_int(hash_message(MESSAGE1, eip191=True))
        h2 = digest_to_int(hash_message(MESSAGE2, eip191=True))
        self.assertEqual(recover_address(h1, fields['Signature1']), fields['Address'])
        self.assertEqual(recover_address(h2, fields['Signature2']), fields['Address'])

    def test_missing_message_is_usage_error(self):
        proc = run_cli('--m1', MESSAGE1)
        self.assertEqual(proc.returncode, 2)
        self.assertIn("Specify both messages", proc.stderr)
        self.assertIn("usage:", proc.stderr)
        self.assertEqual(proc.stdout, "")


class TestCliMain(unittest.TestCase):

    def test_long_option_names(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main(['--message1', 'a', '--message2', 'b'])
        self.assertEqual(code, 0)

        fields = parse_output(out.getvalue())
        self.assertEqual(recover_address(digest_to_int(hash_message('a')), fields['Signature1']), fields['Address'])
        self.assertEqual(recover_address(digest_to_int(hash_message('b')), fields['Signature2']), fields['Address'])

    def test_output_layout(self):
        out = io.StringIO()
        with redirect_stdout(out):
            cli.main(['--m1', 'a', '--m2', 'b'])
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 8)
        self.assertTrue(lines[0].startswith("Private key: "))
        self.assertTrue(lines[1].startswith("Address: "))
        self.assertEqual(lines[2], "")
        self.assertEqual(lines[3], "Message1: a")
        self.assertTrue(re.match(r"Signature1: 0x", lines[4]))
        self.assertEqual(lines[5], "")
        self.assertEqual(lines[6], "Message2: b")
        self.assertTrue(re.match(r"Signature2: 0x", lines[7]))

    def test_empty_message_rejected(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(['--m1', '', '--m2', 'b'])
        self.assertEqual(ctx.exception.code, 2)

    def test_identical_messages_exit_nonzero(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertLogs('ecdsa_quirks.cli', level='ERROR'):
            code = cli.main(['--m1', 'same', '--m2', 'same'])
        self.assertEqual(code, 1)
        self.assertEqual(out.getvalue(), "")

    def test_internal_fault_exit_nonzero(self):
        with mock.patch.object(cli, 'quirk', side_effect=InternalConsistencyError("signature1 does not recover")):
            with self.assertLogs('ecdsa_quirks.cli', level='ERROR') as logs:
                code = cli.main(['--m1', 'a', '--m2', 'b'])
        self.assertEqual(code, 1)
        self.assertIn("signature1 does not recover", logs.output[0])


if __name__ == '__main__':
    unittest.main()
