from marl.cli import main

raise SystemExit(main())
