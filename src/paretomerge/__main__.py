from paretomerge.cli import main

raise SystemExit(main())
