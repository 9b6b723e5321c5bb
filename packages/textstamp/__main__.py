from textstamp.cli import main

raise SystemExit(main())
