from repostarter.cli import main

raise SystemExit(main())
