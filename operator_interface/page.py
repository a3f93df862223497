"""
Status page served at ``/``

The page shows the current login state and subscribes to ``/events`` for
QR codes, login/logout changes and debug log lines.
"""

from html import escape

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="zh-CN">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>
    body {{ font-family: sans-serif; margin: 2em; }}
    #qrcode img {{ width: 240px; height: 240px; }}
    #logs {{ font-family: monospace; white-space: pre-wrap; background: #f4f4f4; padding: 1em; max-height: 60vh; overflow-y: auto; }}
    .error {{ color: #b00020; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
  <p>状态：<span id="status">{status}</span></p>
  <p><a href="/logout">登出</a></p>
  <div id="qrcode" {qr_hidden}><img src="/qrcode.svg" alt="QR code"></div>
  <div id="logs"></div>
  <script>
    const statusEl = document.getElementById('status');
    const qrEl = document.getElementById('qrcode');
    const logsEl = document.getElementById('logs');
    const source = new EventSource('/events');

    source.onmessage = (event) => {{
      const data = JSON.parse(event.data);
      if (data.type === 'qrcode') {{
        qrEl.hidden = false;
        qrEl.querySelector('img').src = '/qrcode.svg?t=' + Date.now();
      }} else if (data.type === 'login') {{
        qrEl.hidden = true;
        statusEl.textContent = '已登录：' + data.message;
      }} else if (data.type === 'logout') {{
        statusEl.textContent = '未登录';
      }} else if (data.type === 'log') {{
        const line = document.createElement('div');
        if (data.message.startsWith('{error_marker}')) {{
          line.className = 'error';
        }}
        line.textContent = new Date().toLocaleTimeString() + ' ' + data.message;
        logsEl.appendChild(line);
        logsEl.scrollTop = logsEl.scrollHeight;
      }}
    }};
  </script>
</body>
</html>
"""


def render_page(title: str, logged_in_name: str, has_qrcode: bool, error_marker: str) -> str:
    if logged_in_name:
        status = f"已登录：{escape(logged_in_name)}"
    else:
        status = "未登录"

    return PAGE_TEMPLATE.format(
        title=escape(title),
        status=status,
        qr_hidden="" if has_qrcode and not logged_in_name else "hidden",
        error_marker=escape(error_marker.strip())
    )
