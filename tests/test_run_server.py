"""Tests for the server entry point."""

import unittest
from unittest.mock import patch

import run_server


class TestRunServer(unittest.TestCase):

    def test_defaults(self):
        with patch('sys.argv', ['run_server.py']), patch('builtins.print'), \
                patch('run_server.uvicorn') as uvicorn:
            run_server.main()
        uvicorn.run.assert_called_once_with('server.app:app', host='0.0.0.0', port=8000, reload=True)

    def test_port_and_no_reload(self):
        with patch('sys.argv', ['run_server.py', '--port', '9000', '--no-reload']), \
                patch('builtins.print'), patch('run_server.uvicorn') as uvicorn:
            run_server.main()
        _, kwargs = uvicorn.run.call_args
        self.assertEqual(kwargs['port'], 9000)
        self.assertFalse(kwargs['reload'])


if __name__ == '__main__':
    unittest.main()
