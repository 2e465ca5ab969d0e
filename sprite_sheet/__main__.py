from sprite_sheet.main import main

raise SystemExit(main())
