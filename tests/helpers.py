import io
import zipfile


def make_zip(files, root="app-main"):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in files.items():
            zf.writestr(f"{root}/{name}", content)
    return buf.getvalue()


class DummyResp:
    def __init__(self, status_code=200, body=b"", reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._body = body

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self._body), chunk_size):
            yield self._body[i:i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


ENTRY_JS = """import { start } from "./lib/bot.js";
import config from './config.js';
import readline from "readline";

const rl = readline.createInterface({ input: process.stdin, output: process.stdout });
const phoneNumber = await new Promise((resolve) => rl.question("Number: ", resolve));
rl.close();
start(config, phoneNumber);
"""
