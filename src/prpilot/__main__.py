"""``python -m prpilot`` エントリポイント。"""

from prpilot.cli import main

main()
